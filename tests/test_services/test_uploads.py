"""Tests for the two-step object upload."""

import json

import httpx
import pytest

from nusong_client.services.base import APIError
from nusong_client.services.client import NuSongClient
from nusong_client.services.uploads import UploadAPI

SIGNED_URL = "https://storage.test/bucket/uploads/abc123?X-Goog-Signature=sig"


class StorageBackend:
    """Records requests made during an upload."""

    def __init__(self, storage_status: int = 200) -> None:
        self.storage_status = storage_status
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/api/objects/upload":
            return httpx.Response(200, json={"uploadURL": SIGNED_URL})
        if request.url.host == "storage.test":
            return httpx.Response(self.storage_status)
        if request.url.path == "/api/objects/normalize-path":
            assert json.loads(request.content) == {"uploadURL": SIGNED_URL}
            return httpx.Response(200, json={"objectPath": "/objects/uploads/abc123"})
        if request.url.path == "/objects/uploads/abc123":
            return httpx.Response(200, content=b"RIFF....WAVE")
        return httpx.Response(404)


def make_api(backend: StorageBackend) -> UploadAPI:
    client = NuSongClient(base_url="http://test", transport=httpx.MockTransport(backend))
    return UploadAPI(client)


class TestUpload:
    async def test_upload_returns_object_path(self) -> None:
        backend = StorageBackend()
        uploads = make_api(backend)

        object_path = await uploads.upload(b"RIFF....WAVE", "audio/wav")

        assert object_path == "/objects/uploads/abc123"
        methods = [(r.method, r.url.host) for r in backend.requests]
        assert methods == [("POST", "test"), ("PUT", "storage.test"), ("POST", "test")]

        put = backend.requests[1]
        assert put.content == b"RIFF....WAVE"
        assert put.headers["Content-Type"] == "audio/wav"

    async def test_failed_storage_put_stops_upload(self) -> None:
        backend = StorageBackend(storage_status=500)
        uploads = make_api(backend)

        with pytest.raises(APIError):
            await uploads.upload(b"data", "audio/mpeg")

        assert all(r.url.path != "/api/objects/normalize-path" for r in backend.requests)

    async def test_resolve_fetches_content(self) -> None:
        uploads = make_api(StorageBackend())

        assert await uploads.resolve("/objects/uploads/abc123") == b"RIFF....WAVE"
