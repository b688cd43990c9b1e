"""
Travel Relay — Upstream HTTP Client
=====================================

What:  Thin wrapper around a shared httpx.AsyncClient that issues exactly one
       outbound call and returns the decoded JSON body.
How:   Drops unset (None) parameters, applies the configured timeout, and turns
       every failure mode into UpstreamError with a best-effort message.
Who:   FlightDataService, PlacesService and ImageGenerationService.
When:  Once per relayed request.

Failure modes (all → UpstreamError, no retry):
    - Transport: connect error, timeout, protocol error
    - Status:    any non-2xx response
    - Decode:    body is not JSON
"""

import logging
import time
from typing import Any, Dict, Mapping, Optional

import httpx

from travel_relay.exceptions import UpstreamError

logger = logging.getLogger(__name__)


def drop_unset(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Removes None values so absent optional parameters are not sent at all."""
    return {key: value for key, value in params.items() if value is not None}


def extract_error_message(response: httpx.Response) -> str:
    """
    Best-effort error text from a failed upstream response.

    SerpApi answers {"error": "..."}; OpenAI answers {"error": {"message": "..."}}.
    Anything else falls back to the status line.
    """
    fallback = f"Request failed with status code {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return fallback

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, str) and error:
            return error
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
    return fallback


class UpstreamClient:
    """
    Issues single outbound JSON calls on behalf of the relay.

    The underlying AsyncClient is owned by the application (created in
    create_app(), closed in the lifespan shutdown hook) and shared across
    requests. No pooling policy or retry transport is configured on it.
    """

    def __init__(self, client: httpx.AsyncClient, timeout: float = 60.0):
        self._client = client
        self.timeout = timeout

    async def get_json(
        self,
        url: str,
        params: Mapping[str, Any],
        *,
        provider: str,
    ) -> Any:
        """GET url with query params; returns the decoded JSON body."""
        return await self._send("GET", url, provider=provider, params=drop_unset(params))

    async def post_json(
        self,
        url: str,
        payload: Mapping[str, Any],
        *,
        provider: str,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """POST a JSON payload; returns the decoded JSON body."""
        return await self._send("POST", url, provider=provider, json=dict(payload), headers=headers)

    async def _send(self, method: str, url: str, *, provider: str, **kwargs: Any) -> Any:
        start_time = time.perf_counter()

        try:
            response = await self._client.request(method, url, timeout=self.timeout, **kwargs)
        except httpx.HTTPError as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.warning(
                "%s %s call failed after %.0fms: %s",
                provider,
                method,
                duration_ms,
                type(e).__name__,
            )
            raise UpstreamError(
                message=str(e) or f"{provider} request failed ({type(e).__name__})",
                context={"provider": provider, "error_type": type(e).__name__},
            ) from e

        duration_ms = (time.perf_counter() - start_time) * 1000

        if not response.is_success:
            message = extract_error_message(response)
            logger.warning(
                "%s %s returned %d in %.0fms: %s",
                provider,
                method,
                response.status_code,
                duration_ms,
                message,
            )
            raise UpstreamError(
                message=message,
                upstream_status=response.status_code,
                context={"provider": provider},
            )

        try:
            body = response.json()
        except ValueError as e:
            logger.warning("%s returned a non-JSON body (%d bytes)", provider, len(response.content))
            raise UpstreamError(
                message=f"Invalid JSON in {provider} response",
                upstream_status=response.status_code,
                context={"provider": provider},
            ) from e

        logger.info("%s %s completed in %.0fms", provider, method, duration_ms)
        return body
