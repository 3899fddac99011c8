# publishers/base.py
from abc import ABC, abstractmethod

from context import RunContext


class BasePublisher(ABC):
    """
    [V1.0] 发布渠道抽象基类
    所有具体的发布方式 (Gist, Feishu...) 都必须继承此类。
    发布失败时抛出 PublishError，不返回状态码。
    """

    def __init__(self, context: RunContext):
        self.context = context
        self.global_config = context.global_config

    @property
    @abstractmethod
    def name(self) -> str:
        """返回发布渠道的名称 (日志显示用)"""
        pass

    @abstractmethod
    def is_enabled(self) -> bool:
        """
        判断此渠道是否应该激活。
        例如：FeishuPublisher 检查 FEISHU_WEBHOOK 是否存在。
        """
        pass

    @abstractmethod
    def publish(self, content: str) -> None:
        """
        用渲染好的文本覆盖远端内容。
        :raises PublishError: 写入失败
        """
        pass
