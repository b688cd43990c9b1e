"""
Travel Relay — Places Route Tests
===================================

What:  The three /google-places-* relays against a recorded upstream.

What we test:
    ✅ Missing required parameter → 400, no upstream call
    ✅ Exactly the documented parameters are forwarded, with the server key
    ✅ Nearby search defaults radius to 50000 and fixes type=airport
    ✅ Upstream bodies are relayed unchanged; failures become 500
"""

import pytest


class TestAutocomplete:
    """GET /google-places-autocomplete"""

    @pytest.mark.asyncio
    async def test_missing_input(self, test_client, upstream):
        response = await test_client.get("/google-places-autocomplete")

        assert response.status_code == 400
        assert response.json() == {"error": "Missing 'input' parameter"}
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_forwards_exact_parameters(self, test_client, upstream):
        """types is omitted entirely when the caller did not send it."""
        upstream.reply(200, json={"predictions": [{"description": "JFK Airport"}], "status": "OK"})

        response = await test_client.get("/google-places-autocomplete", params={"input": "JFK"})

        assert response.status_code == 200
        assert response.json() == {"predictions": [{"description": "JFK Airport"}], "status": "OK"}
        assert len(upstream.requests) == 1
        sent = upstream.last
        assert sent.method == "GET"
        assert sent.url.path == "/maps/api/place/autocomplete/json"
        assert dict(sent.url.params) == {"input": "JFK", "key": "test-maps-key"}

    @pytest.mark.asyncio
    async def test_forwards_types(self, test_client, upstream):
        await test_client.get(
            "/google-places-autocomplete", params={"input": "JFK", "types": "airport"}
        )
        assert dict(upstream.last.url.params) == {
            "input": "JFK",
            "types": "airport",
            "key": "test-maps-key",
        }

    @pytest.mark.asyncio
    async def test_caller_key_not_forwarded(self, test_client, upstream):
        await test_client.get(
            "/google-places-autocomplete", params={"input": "JFK", "key": "callers-key"}
        )
        assert upstream.last.url.params["key"] == "test-maps-key"

    @pytest.mark.asyncio
    async def test_upstream_http_error(self, test_client, upstream):
        upstream.reply(503, content=b"Service Unavailable")

        response = await test_client.get("/google-places-autocomplete", params={"input": "JFK"})

        assert response.status_code == 500
        assert response.json() == {"error": "Request failed with status code 503"}


class TestDetails:
    """GET /google-places-details"""

    @pytest.mark.asyncio
    async def test_missing_place_id(self, test_client, upstream):
        response = await test_client.get("/google-places-details", params={"type": "airport"})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing 'place_id' parameter"}
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_forwards_place_id_and_type(self, test_client, upstream):
        upstream.reply(200, json={"result": {"name": "JFK"}, "status": "OK"})

        response = await test_client.get(
            "/google-places-details", params={"place_id": "ChIJ123", "type": "airport"}
        )

        assert response.json() == {"result": {"name": "JFK"}, "status": "OK"}
        assert upstream.last.url.path == "/maps/api/place/details/json"
        assert dict(upstream.last.url.params) == {
            "type": "airport",
            "place_id": "ChIJ123",
            "key": "test-maps-key",
        }

    @pytest.mark.asyncio
    async def test_provider_status_relayed_unchanged(self, test_client, upstream):
        """Places reports errors inside a 200 body; the relay passes it through."""
        body = {"error_message": "The provided API key is invalid.", "status": "REQUEST_DENIED"}
        upstream.reply(200, json=body)

        response = await test_client.get("/google-places-details", params={"place_id": "x"})

        assert response.status_code == 200
        assert response.json() == body


class TestNearby:
    """GET /google-places-nearby"""

    @pytest.mark.asyncio
    async def test_missing_location(self, test_client, upstream):
        response = await test_client.get("/google-places-nearby", params={"radius": "1000"})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing 'location' parameter"}
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_default_radius_and_airport_type(self, test_client, upstream):
        await test_client.get("/google-places-nearby", params={"location": "40.64,-73.78"})

        sent = upstream.last
        assert sent.url.path == "/maps/api/place/nearbysearch/json"
        assert dict(sent.url.params) == {
            "location": "40.64,-73.78",
            "radius": "50000",
            "type": "airport",
            "key": "test-maps-key",
        }

    @pytest.mark.asyncio
    async def test_radius_and_type_override(self, test_client, upstream):
        """Caller radius is honoured; caller type is not."""
        await test_client.get(
            "/google-places-nearby",
            params={"location": "51.47,-0.45", "radius": "20000", "type": "restaurant"},
        )
        params = upstream.last.url.params
        assert params["radius"] == "20000"
        assert params["type"] == "airport"
