# orchestrator.py
"""
[V1.0] 业务逻辑编排器
采集 -> 渲染 -> 发布，严格顺序执行，每个网络请求完成后才发起下一个。
不做任何错误恢复：所有异常都交给 CommitHabit.py 处理。
"""
import logging
from datetime import datetime
from typing import Optional

from github import Github

from context import RunContext
import report_builder
from data_sources.factory import create_github_client, get_data_source
from publishers.factory import get_active_publishers

logger = logging.getLogger(__name__)


class HabitOrchestrator:
    """
    负责执行一次完整的统计与发布流程。
    """

    def __init__(self, context: RunContext, client: Optional[Github] = None):
        self.context = context
        self.global_config = context.global_config
        self.client = client if client is not None else create_github_client(context)

        self.data_source = get_data_source(context, self.client)
        self.publishers = (
            [] if context.dry_run else get_active_publishers(context, self.client)
        )

    def run(self, now: Optional[datetime] = None) -> str:
        """
        执行核心业务流程，返回渲染好的文本。
        """
        # --- 1. 采集 ---
        stats = self.data_source.collect()

        # --- 2. 渲染 ---
        summary = report_builder.generate_summary(stats, self.global_config, now)

        # --- 3. 发布 ---
        if self.context.dry_run:
            logger.info("🧪 Dry run：跳过发布，输出渲染结果。")
            print(summary, end="")
            return summary

        if not self.publishers:
            logger.warning("⚠️ 没有可用的发布渠道，渲染结果未写入任何位置。")
        for publisher in self.publishers:
            publisher.publish(summary)

        return summary
