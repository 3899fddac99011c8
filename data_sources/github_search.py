# data_sources/github_search.py
import logging
from datetime import datetime, timedelta
from typing import Any, Iterable, List, Optional

import pytz
from github import Github

from .base import CommitSource
from context import RunContext
from models import CommitTime

logger = logging.getLogger(__name__)


class GitHubSearchSource(CommitSource):
    """
    基于提交搜索 (/search/commits) 的数据源。
    一条搜索结果即一个提交，不做加权。
    """

    def __init__(
        self, context: RunContext, client: Github, now: Optional[datetime] = None
    ):
        super().__init__(context, client)
        self.now = now
        self._results = None

    @property
    def name(self) -> str:
        return "GitHub Search"

    def since_date(self) -> str:
        """搜索窗口起始日期 (目标时区的日历日期)"""
        now = self.now or datetime.now(pytz.utc)
        start = now.astimezone(self.global_config.tz) - timedelta(
            days=self.global_config.SEARCH_DAYS
        )
        return start.strftime("%Y-%m-%d")

    def fetch_page(self, page: int) -> List[Any]:
        if self._results is None:
            since = self.since_date()
            logger.info(f"🔎 搜索条件: author:{self.username} committer-date:>={since}")
            self._results = self.client.search_commits(
                query=f"author:{self.username}",
                sort="committer-date",
                order="desc",
                **{"committer-date": f">={since}"},
            )
        return list(self._results.get_page(page - 1))

    def is_last_page(self, batch: List[Any]) -> bool:
        return len(batch) < self.global_config.PER_PAGE

    def to_commit_times(self, record: Any) -> Iterable[CommitTime]:
        try:
            instant = record.commit.author.date
        except AttributeError:
            logger.warning(f"⚠️ 搜索结果缺少提交时间: {getattr(record, 'sha', '?')}")
            return []
        return [CommitTime(instant=instant, count=1)]
