"""
Travel Relay — Flight Data Service (SerpApi)
==============================================

What:  Relays flight searches and image searches to SerpApi.
How:   Builds the SerpApi parameter set (caller params + fixed locale params +
       server key) and issues one GET to search.json.
Who:   /search-flights and /get-image routes.
"""

from typing import Any, Dict, Mapping

from travel_relay.services.upstream import UpstreamClient

# Fixed locale for every flight search; overrides anything the caller sends.
FLIGHT_LOCALE = {"hl": "en", "gl": "us", "currency": "USD"}

IMAGE_SEARCH_PARAMS = {
    "engine": "google_images",
    "google_domain": "google.com",
    "hl": "en",
    "gl": "us",
    "device": "desktop",
}


class FlightDataService:
    """SerpApi client for the flight search and image search relays."""

    PROVIDER = "serpapi"

    def __init__(self, upstream: UpstreamClient, api_key: str, url: str):
        self._upstream = upstream
        self._api_key = api_key
        self._url = url

    async def search_flights(self, params: Mapping[str, str]) -> Any:
        """
        Forward a flight search.

        Every caller parameter is passed through (engine, departure_id,
        arrival_id, outbound_date, return_date, departure_token,
        booking_token, ...). hl/gl/currency and api_key are always the
        relay's own values.
        """
        query: Dict[str, Any] = dict(params)
        query.update(FLIGHT_LOCALE)
        query["api_key"] = self._api_key
        return await self._upstream.get_json(self._url, query, provider=self.PROVIDER)

    async def search_images(self, query: str) -> Any:
        """Google Images search through SerpApi for a destination picture."""
        params: Dict[str, Any] = dict(IMAGE_SEARCH_PARAMS)
        params["q"] = query
        params["api_key"] = self._api_key
        return await self._upstream.get_json(self._url, params, provider=self.PROVIDER)
