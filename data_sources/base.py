# data_sources/base.py
import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional

import requests
from github import Github, GithubException

from context import RunContext
from errors import AuthenticationError, CollectionError
from models import CommitStats, CommitTime, classify_hour
from utils import to_local

logger = logging.getLogger(__name__)

AUTH_FAILURE_STATUSES = (401, 403)


def raise_for_github_error(error: GithubException, action: str):
    """
    将 PyGithub 异常转换为本项目的异常类型。
    401/403 视为认证失败，其余统一视为采集失败。
    """
    message = ""
    if isinstance(error.data, dict):
        message = error.data.get("message", "")
    if error.status in AUTH_FAILURE_STATUSES:
        logger.error(
            "🔑 Token 认证失败，请检查仓库 Secrets 中的 GIST_TOKEN 及其权限范围。"
        )
        raise AuthenticationError(
            f"{action}失败: {error.status} {message}".strip()
        ) from error
    raise CollectionError(f"{action}失败: {error.status} {message}".strip()) from error


class CommitSource(ABC):
    """
    提交数据源抽象基类
    子类负责单页拉取与记录解析，翻页、分桶与统计在基类中统一完成。
    """

    def __init__(self, context: RunContext, client: Github):
        self.context = context
        self.global_config = context.global_config
        self.client = client
        self.username: Optional[str] = None

        # 运行统计 (日志用)
        self.records_fetched = 0
        self.records_counted = 0

    @property
    @abstractmethod
    def name(self) -> str:
        """数据源名称 (日志显示用)"""
        pass

    @abstractmethod
    def fetch_page(self, page: int) -> List[Any]:
        """
        拉取第 page 页 (从 1 开始) 的原始记录。
        """
        pass

    @abstractmethod
    def to_commit_times(self, record: Any) -> Iterable[CommitTime]:
        """
        将一条原始记录转换为 0 或多个 CommitTime。
        与提交无关的记录返回空。
        """
        pass

    def is_last_page(self, batch: List[Any]) -> bool:
        return not batch

    def authenticate(self) -> str:
        """确认 Token 可用，并确定统计对象的用户名"""
        try:
            login = self.client.get_user().login
        except GithubException as e:
            raise_for_github_error(e, "获取认证用户")
        except requests.RequestException as e:
            raise CollectionError(f"获取认证用户失败: {e}") from e
        logger.info(f"✅ Authenticated as: {login}")
        self.username = self.context.username or self.global_config.GH_USERNAME or login
        if self.username != login:
            logger.info(f"ℹ️ 统计目标用户: {self.username}")
        return self.username

    def collect(self) -> CommitStats:
        """逐页拉取并按本地时段累计提交数"""
        if self.username is None:
            self.authenticate()

        stats = CommitStats()
        tz = self.global_config.tz
        max_pages = self.global_config.MAX_PAGES

        logger.info(
            f"📅 [{self.name}] 正在获取 {self.username} 的提交记录 (最多 {max_pages} 页)..."
        )

        for page in range(1, max_pages + 1):
            try:
                batch = self.fetch_page(page)
            except GithubException as e:
                raise_for_github_error(e, f"获取第 {page} 页记录")
            except requests.RequestException as e:
                raise CollectionError(f"获取第 {page} 页记录失败: {e}") from e

            logger.info(f"Page {page}: fetched {len(batch)} records")
            if not batch:
                break
            self.records_fetched += len(batch)

            for record in batch:
                for commit_time in self.to_commit_times(record):
                    try:
                        local = to_local(commit_time.instant, tz)
                    except (TypeError, ValueError, AttributeError) as e:
                        logger.warning(f"⚠️ 跳过无法解析时间的记录: {e}")
                        continue
                    stats.add(classify_hour(local.hour).key, commit_time.count)
                    self.records_counted += 1

            if self.is_last_page(batch):
                break

        self._log_summary(stats)
        return stats

    def _log_summary(self, stats: CommitStats):
        logger.info(
            f"📊 [{self.name}] Records: {self.records_fetched}, "
            f"Counted: {self.records_counted}, Commits: {stats.total}"
        )
        if self.records_fetched == 0:
            logger.warning("⚠️  未获取到任何记录，Token 可能需要更大的权限:")
            logger.warning('   - Fine-grained PAT: 将 Repository access 设为 "All repositories"')
            logger.warning('   - 或使用带 "repo" + "gist" 权限的 Classic PAT')
