# config.py
"""
[V1.0] 全局配置
- .env 通过 python-dotenv 加载 (优先脚本目录，其次 CWD)
- GlobalConfig 是显式构造的配置对象，组件不再读取模块级全局变量
"""
import logging
import os
from dataclasses import dataclass, field, replace
from typing import List, Mapping, Optional

import pytz
from dotenv import load_dotenv

from errors import ConfigError

logger = logging.getLogger(__name__)

# --- 脚本基础路径 ---
SCRIPT_BASE_PATH = os.path.abspath(os.path.dirname(__file__))

SOURCE_EVENTS = "events"
SOURCE_SEARCH = "search"
AVAILABLE_SOURCES = (SOURCE_EVENTS, SOURCE_SEARCH)

# GitHub API 单页上限
MAX_PER_PAGE = 100
# 翻页上限，防止耗尽 API 额度
PAGE_LIMIT = 10


def load_env_file(base_path: str = SCRIPT_BASE_PATH) -> Optional[str]:
    """加载 .env，返回实际使用的路径 (未找到脚本目录下的 .env 时返回 None)"""
    env_path = os.path.join(base_path, ".env")
    if os.path.exists(env_path):
        load_dotenv(env_path)
        logger.info(f"✅ 已从脚本目录加载 .env: {env_path}")
        return env_path
    load_dotenv()
    logger.debug("ℹ️ 未在脚本目录找到 .env，尝试从 CWD 加载。")
    return None


def _parse_int(raw: Optional[str], key: str, default: int, problems: List[str]) -> int:
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        problems.append(f"{key} 必须是整数 (当前: {raw!r})")
        return default


@dataclass
class GlobalConfig:
    """
    一次运行所需的全部外部配置。
    """

    # --- GitHub 凭证与目标 ---
    GIST_TOKEN: str = ""
    GIST_ID: str = ""
    GH_USERNAME: str = ""
    GIST_FILENAME: str = "commit-habit.md"

    # --- 统计参数 ---
    TIME_ZONE: str = "Asia/Shanghai"
    COMMIT_SOURCE: str = SOURCE_EVENTS
    MAX_PAGES: int = 3
    PER_PAGE: int = MAX_PER_PAGE
    SEARCH_DAYS: int = 90

    # --- 渲染 ---
    BAR_WIDTH: int = 20
    SHOW_PERCENT: bool = True

    # --- 飞书群 Webhook (可选镜像推送) ---
    FEISHU_WEBHOOK: str = ""

    USER_AGENT: str = "Gist-Updater-Python"
    SCRIPT_BASE_PATH: str = SCRIPT_BASE_PATH

    # 解析环境变量时遇到的问题，留到 validate() 统一报告
    parse_problems: List[str] = field(default_factory=list, repr=False)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "GlobalConfig":
        """从环境变量 (默认 os.environ) 构造配置"""
        if env is None:
            env = os.environ
        problems: List[str] = []
        defaults = cls()
        return cls(
            GIST_TOKEN=env.get("GIST_TOKEN", "").strip(),
            GIST_ID=env.get("GIST_ID", "").strip(),
            GH_USERNAME=env.get("GH_USERNAME", "").strip(),
            GIST_FILENAME=env.get("GIST_FILENAME", "").strip() or defaults.GIST_FILENAME,
            TIME_ZONE=env.get("TIME_ZONE", "").strip() or defaults.TIME_ZONE,
            COMMIT_SOURCE=(env.get("COMMIT_SOURCE", "").strip() or defaults.COMMIT_SOURCE).lower(),
            MAX_PAGES=_parse_int(env.get("MAX_PAGES"), "MAX_PAGES", defaults.MAX_PAGES, problems),
            PER_PAGE=_parse_int(env.get("PER_PAGE"), "PER_PAGE", defaults.PER_PAGE, problems),
            SEARCH_DAYS=_parse_int(env.get("SEARCH_DAYS"), "SEARCH_DAYS", defaults.SEARCH_DAYS, problems),
            FEISHU_WEBHOOK=env.get("FEISHU_WEBHOOK", "").strip(),
            parse_problems=problems,
        )

    def with_overrides(self, **overrides) -> "GlobalConfig":
        """返回应用了 CLI 覆盖值的新配置，值为 None 的项忽略"""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    def validate(self, require_gist: bool = True) -> "GlobalConfig":
        """
        校验配置，一次性报告全部问题。
        :raises ConfigError: 存在缺失或非法的配置项
        """
        problems = list(self.parse_problems)

        if not self.GIST_TOKEN:
            problems.append("缺少 GIST_TOKEN")
        if require_gist and not self.GIST_ID:
            problems.append("缺少 GIST_ID")
        if require_gist and not self.GIST_FILENAME:
            problems.append("GIST_FILENAME 不能为空")

        try:
            pytz.timezone(self.TIME_ZONE)
        except pytz.UnknownTimeZoneError:
            problems.append(f"未知时区 TIME_ZONE={self.TIME_ZONE!r}")

        if self.COMMIT_SOURCE not in AVAILABLE_SOURCES:
            problems.append(
                f"COMMIT_SOURCE 必须是 {', '.join(AVAILABLE_SOURCES)} 之一 (当前: {self.COMMIT_SOURCE!r})"
            )
        if not 1 <= self.MAX_PAGES <= PAGE_LIMIT:
            problems.append(f"MAX_PAGES 必须在 1..{PAGE_LIMIT} 之间 (当前: {self.MAX_PAGES})")
        if not 1 <= self.PER_PAGE <= MAX_PER_PAGE:
            problems.append(f"PER_PAGE 必须在 1..{MAX_PER_PAGE} 之间 (当前: {self.PER_PAGE})")
        if self.SEARCH_DAYS < 1:
            problems.append(f"SEARCH_DAYS 必须为正数 (当前: {self.SEARCH_DAYS})")
        if self.BAR_WIDTH < 1:
            problems.append(f"BAR_WIDTH 必须为正数 (当前: {self.BAR_WIDTH})")

        if problems:
            raise ConfigError(problems)
        return self

    @property
    def tz(self):
        return pytz.timezone(self.TIME_ZONE)
