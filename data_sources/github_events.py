# data_sources/github_events.py
import logging
from typing import Any, Iterable, List

from github import Github

from .base import CommitSource
from .commit_count import extract_commit_count
from context import RunContext
from models import CommitTime

logger = logging.getLogger(__name__)

PUSH_EVENT = "PushEvent"
# 仅对前几个 PushEvent 输出 payload 诊断信息
DEBUG_SAMPLE_SIZE = 3


class GitHubEventsSource(CommitSource):
    """
    基于用户活动流 (/users/{user}/events) 的数据源。
    只统计 PushEvent，每次推送按其包含的提交数加权。
    """

    def __init__(self, context: RunContext, client: Github):
        super().__init__(context, client)
        self.push_event_count = 0
        self._events = None

    @property
    def name(self) -> str:
        return "GitHub Events"

    def fetch_page(self, page: int) -> List[Any]:
        if self._events is None:
            # per_page 由 Github 客户端统一设置
            self._events = self.client.get_user(self.username).get_events()
        # PaginatedList 的页码从 0 开始
        return list(self._events.get_page(page - 1))

    def to_commit_times(self, record: Any) -> Iterable[CommitTime]:
        if getattr(record, "type", None) != PUSH_EVENT:
            return []
        self.push_event_count += 1

        payload = getattr(record, "payload", None)
        if self.push_event_count <= DEBUG_SAMPLE_SIZE:
            self._log_payload_sample(record, payload)

        count = extract_commit_count(payload)
        return [CommitTime(instant=record.created_at, count=count)]

    def _log_payload_sample(self, record: Any, payload: Any):
        if not isinstance(payload, dict):
            logger.debug(f"🔍 PushEvent #{self.push_event_count} payload 缺失或格式异常: {type(payload).__name__}")
            return
        commits = payload.get("commits")
        repo = getattr(getattr(record, "repo", None), "name", None)
        logger.debug(f"🔍 PushEvent #{self.push_event_count} payload keys: {list(payload.keys())}")
        logger.debug(
            f"   payload.size={payload.get('size')}, payload.distinct_size={payload.get('distinct_size')}"
        )
        logger.debug(
            f"   payload.commits isList={isinstance(commits, list)}, "
            f"length={len(commits) if isinstance(commits, list) else None}"
        )
        logger.debug(f"   event.created_at={getattr(record, 'created_at', None)}, repo={repo}")

    def _log_summary(self, stats):
        logger.info(f"📦 PushEvents: {self.push_event_count}")
        super()._log_summary(stats)
