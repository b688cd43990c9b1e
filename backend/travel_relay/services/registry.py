"""
Travel Relay — Service Registry
=================================

What:  Holds one instance of each upstream service, built from Settings.
How:   create_app() calls build_services() and stores the result on
       app.state.services; the route table reads it from there per request.
Who:   main.create_app() (production) and the test fixtures (with a mock
       transport and an in-memory object store).
"""

from dataclasses import dataclass
from typing import Optional

import httpx

from travel_relay.config import Settings
from travel_relay.services.flights import FlightDataService
from travel_relay.services.image_generation import ImageGenerationService
from travel_relay.services.places import PlacesService
from travel_relay.services.storage import ImageUploadService, S3ObjectStorage
from travel_relay.services.storage_base import ObjectStorage
from travel_relay.services.upstream import UpstreamClient


@dataclass
class ServiceRegistry:
    """Per-application service container; shares one httpx client."""

    http_client: httpx.AsyncClient
    flights: FlightDataService
    places: PlacesService
    images: ImageGenerationService
    uploads: ImageUploadService

    async def aclose(self) -> None:
        await self.http_client.aclose()


def build_services(
    settings: Settings,
    http_client: Optional[httpx.AsyncClient] = None,
    storage: Optional[ObjectStorage] = None,
) -> ServiceRegistry:
    """
    Build every service from settings.

    Args:
        settings:     Immutable application settings
        http_client:  Outbound client override (tests pass a MockTransport client)
        storage:      Object store override (tests pass an in-memory store)
    """
    if http_client is None:
        http_client = httpx.AsyncClient(timeout=settings.upstream_timeout_seconds)
    if storage is None:
        storage = S3ObjectStorage(
            bucket=settings.aws_bucket_name,
            region=settings.aws_region,
            access_key_id=settings.aws_access_key_id,
            secret_access_key=settings.aws_secret_access_key,
            timeout=settings.upstream_timeout_seconds,
        )

    upstream = UpstreamClient(http_client, timeout=settings.upstream_timeout_seconds)

    return ServiceRegistry(
        http_client=http_client,
        flights=FlightDataService(upstream, settings.serpapi_api_key, settings.serpapi_url),
        places=PlacesService(upstream, settings.google_maps_api_key, settings.google_places_url),
        images=ImageGenerationService(
            upstream,
            settings.openai_api_key,
            settings.openai_images_url,
            settings.openai_image_model,
        ),
        uploads=ImageUploadService(storage),
    )
