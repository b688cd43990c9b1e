"""
Travel Relay — Image Generation Service (OpenAI Images API)
=============================================================

What:  Generates a trip logo for a title and returns it as base64.
How:   One POST to the images/generations endpoint with a fixed model and
       prompt template, response_format=b64_json.
Who:   /generate-image route.
When:  When the front-end creates a new trip and wants a logo for it.
"""

import logging
from typing import Any

from travel_relay.exceptions import UpstreamError
from travel_relay.services.upstream import UpstreamClient

logger = logging.getLogger(__name__)


class ImageGenerationService:
    """
    OpenAI image generation for trip logos.

    The prompt asks for the title to be rendered verbatim inside the logo.
    """

    PROVIDER = "openai"

    PROMPT_TEMPLATE = 'Create an image of a logo for {title} use the text exactly like: "{title}"'

    def __init__(self, upstream: UpstreamClient, api_key: str, url: str, model: str):
        self._upstream = upstream
        self._api_key = api_key
        self._url = url
        self.model = model

    def build_prompt(self, title: str) -> str:
        return self.PROMPT_TEMPLATE.format(title=title)

    async def generate_logo(self, title: str) -> str:
        """
        Generate one logo image.

        Returns:
            The base64-encoded image (data[0].b64_json).

        Raises:
            UpstreamError: On any call failure or when the response has no image.
        """
        payload = {
            "model": self.model,
            "prompt": self.build_prompt(title),
            "n": 1,
            "response_format": "b64_json",
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}

        body = await self._upstream.post_json(
            self._url, payload, provider=self.PROVIDER, headers=headers
        )
        return self._extract_base64(body)

    @staticmethod
    def _extract_base64(body: Any) -> str:
        try:
            image = body["data"][0]["b64_json"]
        except (KeyError, IndexError, TypeError) as e:
            logger.warning("Image generation response missing data[0].b64_json")
            raise UpstreamError(message="Image generation response contained no image") from e
        if not isinstance(image, str):
            raise UpstreamError(message="Image generation response contained no image")
        return image
