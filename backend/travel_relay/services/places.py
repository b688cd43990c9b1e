"""
Travel Relay — Places Service (Google Maps Places API)
========================================================

What:  Relays airport lookups to the Places web service.
How:   One GET per call against {base}/autocomplete/json, /details/json or
       /nearbysearch/json with the server's key appended.
Who:   The three /google-places-* routes.

The Places API reports its own failures inside a 200 body
({"status": "REQUEST_DENIED", ...}); those bodies are relayed unchanged.
"""

from typing import Any, Optional

from travel_relay.services.upstream import UpstreamClient

DEFAULT_NEARBY_RADIUS = "50000"
NEARBY_PLACE_TYPE = "airport"


class PlacesService:
    """Google Places client: autocomplete, details and nearby search."""

    PROVIDER = "google_places"

    def __init__(self, upstream: UpstreamClient, api_key: str, base_url: str):
        self._upstream = upstream
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    def _endpoint(self, name: str) -> str:
        return f"{self._base_url}/{name}/json"

    async def autocomplete(self, input_text: str, types: Optional[str] = None) -> Any:
        """Suggestions for text typed into an airport field; types is omitted when unset."""
        params = {"input": input_text, "types": types, "key": self._api_key}
        return await self._upstream.get_json(
            self._endpoint("autocomplete"), params, provider=self.PROVIDER
        )

    async def details(self, place_id: str, place_type: Optional[str] = None) -> Any:
        """Place details, used for coordinates near a trip centre or an airport's city."""
        params = {"type": place_type, "place_id": place_id, "key": self._api_key}
        return await self._upstream.get_json(
            self._endpoint("details"), params, provider=self.PROVIDER
        )

    async def nearby_airports(self, location: str, radius: Optional[str] = None) -> Any:
        """Airports around a "lat,lng" location; radius defaults to 50km."""
        params = {
            "location": location,
            "radius": radius or DEFAULT_NEARBY_RADIUS,
            "type": NEARBY_PLACE_TYPE,
            "key": self._api_key,
        }
        return await self._upstream.get_json(
            self._endpoint("nearbysearch"), params, provider=self.PROVIDER
        )
