# data_sources/factory.py
import logging

from github import Auth, Github

from config import SOURCE_EVENTS, SOURCE_SEARCH
from context import RunContext
from errors import ConfigError
from .base import CommitSource
from .github_events import GitHubEventsSource
from .github_search import GitHubSearchSource

logger = logging.getLogger(__name__)

# --- 在这里注册新的数据源 ---
AVAILABLE_SOURCES = {
    SOURCE_EVENTS: GitHubEventsSource,
    SOURCE_SEARCH: GitHubSearchSource,
}


def create_github_client(context: RunContext) -> Github:
    """使用 GIST_TOKEN 初始化 PyGithub 客户端"""
    cfg = context.global_config
    return Github(
        auth=Auth.Token(cfg.GIST_TOKEN),
        user_agent=cfg.USER_AGENT,
        per_page=cfg.PER_PAGE,
    )


def get_data_source(context: RunContext, client: Github) -> CommitSource:
    """
    数据源工厂：按 COMMIT_SOURCE 选择实现。
    """
    source_id = context.global_config.COMMIT_SOURCE
    source_cls = AVAILABLE_SOURCES.get(source_id)
    if source_cls is None:
        raise ConfigError(f"未知数据源 COMMIT_SOURCE={source_id!r}")
    logger.info(f"🔌 [Factory] 初始化数据源: {source_cls.__name__}")
    return source_cls(context, client)
