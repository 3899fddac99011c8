# errors.py
"""
[V1.0] 统一异常类型
所有致命错误都向上传播到 CommitHabit.py，由启动器记录日志并以非零码退出。
"""


class HabitError(Exception):
    """所有业务异常的基类"""


class ConfigError(HabitError):
    """启动配置缺失或非法"""

    def __init__(self, problems):
        if isinstance(problems, str):
            problems = [problems]
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


class AuthenticationError(HabitError):
    """Token 无效或权限不足 (HTTP 401/403)"""


class CollectionError(HabitError):
    """拉取提交记录时 API 调用失败"""


class PublishError(HabitError):
    """写入 Gist 或推送 Webhook 失败"""
