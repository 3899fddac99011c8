# context.py
"""
[V1.0] 运行时配置的数据模型
"""
from dataclasses import dataclass

from config import GlobalConfig


@dataclass
class RunContext:
    """
    封装一次运行所需的所有配置和状态。
    这是从 CLI 传递到 Orchestrator 的唯一对象。
    """

    # --- 统计目标 ---
    # 为空时使用 Token 对应的登录用户
    username: str

    # --- 标志 ---
    dry_run: bool

    # --- 全局配置 ---
    # 包含 Token、Gist 目标以及 .env 加载的数据
    global_config: GlobalConfig
