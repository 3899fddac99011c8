# CommitHabit.py
"""
提交时段统计 -> Gist 更新器
  - cli.py: 负责命令行界面和配置组装
  - context.py: 负责运行时配置模型
  - orchestrator.py: 负责核心业务逻辑
  - CommitHabit.py: 仅作为主入口启动器

退出码：0 成功；1 运行失败 (认证 / 网络 / 写入)；2 配置错误
"""

import logging
import sys

# 1. 初始化日志 (必须在所有模块导入之前完成)
import utils

utils.setup_logging()

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def main(argv=None) -> int:
    # 延迟导入，确保日志已配置
    from errors import ConfigError, HabitError

    try:
        import cli

        cli.run_cli(argv)
    except ConfigError as e:
        logger.error("❌ 配置错误，无法启动:")
        for problem in e.problems:
            logger.error(f"   - {problem}")
        return EXIT_CONFIG_ERROR
    except HabitError as e:
        logger.error(f"❌ Program execution failed: {e}")
        return EXIT_FAILURE
    except Exception as e:
        # 捕获所有未处理的全局异常
        logger.error(f"❌ 发生未处理的全局异常: {e}", exc_info=True)
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
