"""
Travel Relay — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   The app under test is built by create_app() with explicit settings, an
       httpx client whose MockTransport records every outbound call, and an
       in-memory object store. No network access and no AWS account needed.

Fixture Hierarchy (all function-scoped):
    ├── test_settings: Settings with fake keys, no .env lookup
    ├── upstream: UpstreamRecorder (captures outbound requests, canned replies)
    ├── object_storage: InMemoryObjectStorage
    ├── app: FastAPI app wired to the three fixtures above
    └── test_client: HTTPX AsyncClient talking to the app over ASGITransport
"""

from typing import Any, Callable, List, Optional, Union

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from travel_relay.config import Settings
from travel_relay.main import create_app
from travel_relay.services.storage_base import ObjectStorage

ALLOWED_ORIGIN = "http://localhost:5173"
DEPLOYED_ORIGIN = "https://travelaid.onrender.com"
EVIL_ORIGIN = "https://evil.example"

Reply = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


class UpstreamRecorder:
    """
    MockTransport handler that records every outbound request.

    Replies are consumed in order; once the queue is empty every call gets
    200 {"ok": true}. A queued Exception is raised instead of answering.

    Usage:
        upstream.reply(200, json={"predictions": []})
        ...
        assert upstream.last.url.params["key"] == "test-maps-key"
    """

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._replies: List[Reply] = []

    def reply(
        self,
        status_code: int = 200,
        json: Any = None,
        content: Optional[bytes] = None,
    ) -> None:
        if content is not None:
            self._replies.append(lambda request: httpx.Response(status_code, content=content))
        else:
            self._replies.append(lambda request: httpx.Response(status_code, json=json))

    def fail(self, exc: Exception) -> None:
        self._replies.append(exc)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._replies:
            return httpx.Response(200, json={"ok": True})
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


class InMemoryObjectStorage(ObjectStorage):
    """Object store double; records each put and builds an S3-style URL."""

    def __init__(self, bucket: str = "test-bucket", region: str = "eu-west-1") -> None:
        self.bucket = bucket
        self.region = region
        self.puts: List[dict] = []
        self.error: Optional[Exception] = None

    async def put_object(self, key: str, body: bytes, content_type: str) -> str:
        self.puts.append({"key": key, "body": body, "content_type": content_type})
        if self.error is not None:
            raise self.error
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"


@pytest.fixture
def test_settings() -> Settings:
    """Settings with fake credentials; the environment and .env are not consulted for keys."""
    return Settings(
        _env_file=None,
        serpapi_api_key="test-serpapi-key",
        google_maps_api_key="test-maps-key",
        openai_api_key="test-openai-key",
        aws_bucket_name="test-bucket",
        aws_region="eu-west-1",
        allowed_origins=f"{ALLOWED_ORIGIN},{DEPLOYED_ORIGIN}",
        serpapi_url="https://serpapi.test/search.json",
        google_places_url="https://maps.test/maps/api/place",
        openai_images_url="https://openai.test/v1/images/generations",
        max_body_bytes=4096,
    )


@pytest.fixture
def upstream() -> UpstreamRecorder:
    return UpstreamRecorder()


@pytest.fixture
def object_storage() -> InMemoryObjectStorage:
    return InMemoryObjectStorage()


@pytest.fixture
def app(test_settings, upstream, object_storage):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))
    return create_app(settings=test_settings, http_client=http_client, storage=object_storage)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient configured to talk to the relay app.

    Usage:
        async def test_unknown(test_client):
            response = await test_client.get("/does-not-exist")
            assert response.status_code == 404
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    await app.state.services.aclose()
