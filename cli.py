# cli.py
"""
[V1.0] 命令行界面 (Interface) 层
负责 argparse 定义、环境变量与命令行参数的合并，以及 RunContext 的组装。
"""
import argparse
import logging
from typing import List, Optional

import utils
from config import AVAILABLE_SOURCES, GlobalConfig, load_env_file
from context import RunContext
from orchestrator import HabitOrchestrator

logger = logging.getLogger(__name__)


def setup_parser() -> argparse.ArgumentParser:
    """
    负责所有 argparse 的定义。
    未指定的参数回退到环境变量 / .env 中的值。
    """
    parser = argparse.ArgumentParser(
        description="统计 GitHub 提交时段分布并更新到 Gist",
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--source",
        type=str,
        choices=AVAILABLE_SOURCES,
        default=None,
        help="提交数据来源。\n"
        "'events': 用户活动流中的 PushEvent (按推送的提交数加权)\n"
        "'search': 提交搜索结果 (每条结果计 1)\n"
        "(默认: COMMIT_SOURCE 或 'events')",
    )
    parser.add_argument(
        "--pages",
        type=int,
        default=None,
        help="最多拉取的页数 (1-10)。\n(默认: MAX_PAGES 或 3)",
    )
    parser.add_argument(
        "--per-page",
        type=int,
        default=None,
        help="每页记录数 (1-100)。\n(默认: PER_PAGE 或 100)",
    )
    parser.add_argument(
        "--days",
        type=int,
        default=None,
        help="(search 模式) 统计最近 N 天的提交。\n(默认: SEARCH_DAYS 或 90)",
    )
    parser.add_argument(
        "-u",
        "--username",
        type=str,
        default=None,
        help="统计目标用户。\n(默认: GH_USERNAME 或 Token 对应的用户)",
    )
    parser.add_argument(
        "--timezone",
        type=str,
        default=None,
        help="分桶与显示使用的时区 (例如 'Asia/Shanghai')。\n(默认: TIME_ZONE 或 Asia/Shanghai)",
    )
    parser.add_argument(
        "--filename",
        type=str,
        default=None,
        help="Gist 中要覆盖的文件名。\n(默认: GIST_FILENAME 或 commit-habit.md)",
    )

    # --- 标志 (Flags) ---
    parser.add_argument("--no-percent", action="store_true", help="不输出百分比列")
    parser.add_argument(
        "--dry-run", action="store_true", help="只渲染并输出到终端，不写入 Gist"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="输出调试日志")

    return parser


def build_config(args: argparse.Namespace) -> GlobalConfig:
    """合并环境变量与命令行覆盖值，并完成校验"""
    global_config = GlobalConfig.from_env().with_overrides(
        COMMIT_SOURCE=args.source,
        MAX_PAGES=args.pages,
        PER_PAGE=args.per_page,
        SEARCH_DAYS=args.days,
        GH_USERNAME=args.username,
        TIME_ZONE=args.timezone,
        GIST_FILENAME=args.filename,
    )
    if args.no_percent:
        global_config = global_config.with_overrides(SHOW_PERCENT=False)
    return global_config.validate(require_gist=not args.dry_run)


def run_cli(argv: Optional[List[str]] = None) -> str:
    """
    主入口点。配置错误以 ConfigError 抛出，由启动器处理。
    """

    # 1. 解析 Args
    parser = setup_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        utils.set_verbose(True)

    # 2. 加载 .env 并组装 GlobalConfig
    load_env_file()
    global_config = build_config(args)

    logger.info("=" * 50)
    logger.info("🚀 Commit Habit 启动...")
    logger.info(f"   [数据来源]: {global_config.COMMIT_SOURCE}")
    logger.info(f"   [目标用户]: {global_config.GH_USERNAME or '(Token 对应用户)'}")
    logger.info(f"   [时区]: {global_config.TIME_ZONE}")
    logger.info(f"   [Gist]: {global_config.GIST_ID or '未设置'} / {global_config.GIST_FILENAME}")
    logger.info("=" * 50)

    # 3. 实例化 Context
    run_context = RunContext(
        username=global_config.GH_USERNAME,
        dry_run=args.dry_run,
        global_config=global_config,
    )

    # 4. 运行 Orchestrator
    orchestrator = HabitOrchestrator(run_context)
    summary = orchestrator.run()
    logger.info("✅ 运行完毕。")
    return summary
