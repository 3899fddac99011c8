# publishers/feishu_publisher.py
import logging

import requests

from errors import PublishError
from .base import BasePublisher

logger = logging.getLogger(__name__)


class FeishuPublisher(BasePublisher):
    """
    飞书群 Webhook 镜像推送 (仅文本)。
    只有配置了 FEISHU_WEBHOOK 时才启用。
    """

    TIMEOUT = 10

    @property
    def name(self) -> str:
        return "Feishu (Lark) Webhook"

    def is_enabled(self) -> bool:
        return bool(self.global_config.FEISHU_WEBHOOK)

    def publish(self, content: str) -> None:
        url = self.global_config.FEISHU_WEBHOOK
        logger.info("ℹ️ [Feishu] 使用 Webhook 模式发送 (仅文本)...")

        payload = {
            "msg_type": "text",
            "content": {"text": f"【Commit Habit】\n\n{content}"},
        }
        try:
            resp = requests.post(url, json=payload, timeout=self.TIMEOUT)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"❌ [Feishu] Webhook 网络错误: {e}")
            raise PublishError(f"飞书 Webhook 推送失败: {e}") from e

        # 新版接口返回 code，旧版返回 StatusCode
        code = data.get("code", data.get("StatusCode"))
        if code != 0:
            logger.error(f"❌ [Feishu] Webhook 错误: {data}")
            raise PublishError(f"飞书 Webhook 返回错误: {data.get('msg', data)}")
        logger.info("✅ [Feishu] Webhook 推送成功。")
