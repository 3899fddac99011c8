# publishers/gist_publisher.py
import logging

import requests
from github import Github, GithubException, InputFileContent

from context import RunContext
from errors import PublishError
from .base import BasePublisher

logger = logging.getLogger(__name__)


class GistPublisher(BasePublisher):
    """
    覆盖写入 Gist 中的单个文件。最后一次写入生效，不做合并。
    """

    def __init__(self, context: RunContext, client: Github):
        super().__init__(context)
        self.client = client

    @property
    def name(self) -> str:
        return "GitHub Gist"

    def is_enabled(self) -> bool:
        return bool(self.global_config.GIST_ID)

    def publish(self, content: str) -> None:
        gist_id = self.global_config.GIST_ID
        filename = self.global_config.GIST_FILENAME
        logger.info(f"📝 [Gist] 正在更新 {gist_id}/{filename} ...")
        try:
            gist = self.client.get_gist(gist_id)
            gist.edit(files={filename: InputFileContent(content)})
        except GithubException as e:
            message = e.data.get("message", "") if isinstance(e.data, dict) else ""
            logger.error(f"❌ Failed to update Gist: {e.status} {message}")
            if e.status in (401, 403):
                logger.error("🔑 请确认 GIST_TOKEN 具有 gist 权限。")
            raise PublishError(f"更新 Gist 失败: {e.status} {message}".strip()) from e
        except requests.RequestException as e:
            logger.error(f"❌ Failed to update Gist: {e}")
            raise PublishError(f"更新 Gist 失败: {e}") from e
        logger.info("✅ Gist updated successfully!")
