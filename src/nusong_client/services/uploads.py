"""Two-step media upload.

1. Ask the backend for a signed upload target.
2. PUT the raw bytes to that target.
3. Ask the backend to turn the target URL into an internal object path.

The object path is what tracks, albums and avatars store; resolving it
against the backend returns the uploaded bytes.
"""

import logging

from nusong_client.schemas.upload import NormalizedPath, UploadTarget
from nusong_client.services.base import BaseAPIClient

logger = logging.getLogger(__name__)


class UploadAPI:
    def __init__(self, client: BaseAPIClient) -> None:
        self.client = client

    async def request_upload_target(self) -> UploadTarget:
        data = await self.client.post("/api/objects/upload")
        return UploadTarget.model_validate(data)

    async def normalize_path(self, upload_url: str) -> str:
        data = await self.client.post(
            "/api/objects/normalize-path", json={"uploadURL": upload_url}
        )
        return NormalizedPath.model_validate(data).object_path

    async def upload(self, data: bytes, content_type: str) -> str:
        """Upload data and return its object path."""
        target = await self.request_upload_target()
        await self.client.put_bytes(target.upload_url, data, content_type)
        object_path = await self.normalize_path(target.upload_url)
        logger.info("Uploaded %d bytes as %s", len(data), object_path)
        return object_path

    async def resolve(self, object_path: str) -> bytes:
        """Fetch the content an object path (or absolute media URL) refers to."""
        return await self.client.get_bytes(object_path)
