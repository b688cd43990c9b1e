"""
Travel Relay — Upstream Client Unit Tests
===========================================

What:  UpstreamClient error shaping, independent of any route.
How:   A bare httpx.AsyncClient over MockTransport.
"""

import json

import httpx
import pytest

from travel_relay.exceptions import UpstreamError
from travel_relay.services.upstream import UpstreamClient, drop_unset, extract_error_message


def make_client(handler) -> UpstreamClient:
    return UpstreamClient(httpx.AsyncClient(transport=httpx.MockTransport(handler)), timeout=5.0)


class TestHelpers:

    def test_drop_unset_keeps_empty_strings(self):
        assert drop_unset({"a": None, "b": "", "c": "x"}) == {"b": "", "c": "x"}

    def test_error_message_openai_shape(self):
        response = httpx.Response(429, json={"error": {"message": "Rate limit reached"}})
        assert extract_error_message(response) == "Rate limit reached"

    def test_error_message_fallback(self):
        response = httpx.Response(502, json={"detail": "bad gateway"})
        assert extract_error_message(response) == "Request failed with status code 502"


class TestUpstreamClient:

    @pytest.mark.asyncio
    async def test_get_json_success(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"status": "OK"})

        client = make_client(handler)
        body = await client.get_json("https://api.test/x", {"a": "1", "b": None}, provider="test")

        assert body == {"status": "OK"}
        assert dict(seen[0].url.params) == {"a": "1"}

    @pytest.mark.asyncio
    async def test_post_json_sends_headers(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(201, json={"id": 1})

        client = make_client(handler)
        body = await client.post_json(
            "https://api.test/y", {"n": 1}, provider="test", headers={"Authorization": "Bearer k"}
        )

        assert body == {"id": 1}
        assert seen[0].headers["authorization"] == "Bearer k"
        assert json.loads(seen[0].content) == {"n": 1}

    @pytest.mark.asyncio
    async def test_non_2xx_raises_with_status(self):
        client = make_client(lambda request: httpx.Response(404, json={"error": "Not found"}))

        with pytest.raises(UpstreamError) as exc_info:
            await client.get_json("https://api.test/x", {}, provider="test")

        assert exc_info.value.message == "Not found"
        assert exc_info.value.upstream_status == 404

    @pytest.mark.asyncio
    async def test_timeout_raises(self):
        def handler(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        client = make_client(handler)

        with pytest.raises(UpstreamError, match="read timed out") as exc_info:
            await client.get_json("https://api.test/x", {}, provider="test")

        assert exc_info.value.context["error_type"] == "ReadTimeout"
