# publishers/factory.py
import logging
from typing import List

from github import Github

from context import RunContext
from .base import BasePublisher
from .feishu_publisher import FeishuPublisher
from .gist_publisher import GistPublisher

logger = logging.getLogger(__name__)


def get_active_publishers(context: RunContext, client: Github) -> List[BasePublisher]:
    """
    工厂方法：实例化并返回所有适用于当前上下文的发布渠道。
    Gist 始终排在第一位。
    """
    candidates: List[BasePublisher] = [
        GistPublisher(context, client),
        FeishuPublisher(context),
    ]
    active_list = []
    for publisher in candidates:
        if publisher.is_enabled():
            active_list.append(publisher)
            logger.info(f"🔌 已激活发布渠道: {publisher.name}")
    return active_list
