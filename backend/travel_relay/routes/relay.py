"""
Travel Relay — Relay Routes
=============================

What:  The fixed set of routes the front-end calls, one upstream call each.
Who:   Called by the travel-planning front-end (flight search, airport
       pickers, destination images, trip logos).

Route Inventory:
    GET  /search-flights              → SerpApi google_flights
    GET  /get-image                   → SerpApi google_images
    GET  /google-places-autocomplete  → Places autocomplete
    GET  /google-places-details       → Places details
    GET  /google-places-nearby        → Places nearby search (airports)
    POST /generate-image              → OpenAI image generation
    POST /upload-image                → S3 PutObject
"""

from typing import Any

from travel_relay.routes.table import BODY, Params, RelayRoute, build_router, require
from travel_relay.services.registry import ServiceRegistry


# ── Flight data ───────────────────────────────────────────────────────────

async def search_flights(services: ServiceRegistry, params: Params) -> Any:
    return await services.flights.search_flights(params)


async def get_image(services: ServiceRegistry, params: Params) -> Any:
    return await services.flights.search_images(params["query"])


# ── Places ────────────────────────────────────────────────────────────────

async def places_autocomplete(services: ServiceRegistry, params: Params) -> Any:
    return await services.places.autocomplete(params["input"], params.get("types"))


async def places_details(services: ServiceRegistry, params: Params) -> Any:
    return await services.places.details(params["place_id"], params.get("type"))


async def places_nearby(services: ServiceRegistry, params: Params) -> Any:
    return await services.places.nearby_airports(params["location"], params.get("radius"))


# ── Images ────────────────────────────────────────────────────────────────

async def generate_image(services: ServiceRegistry, params: Params) -> Any:
    base64_image = await services.images.generate_logo(params["title"])
    return {"base64Image": base64_image}


async def upload_image(services: ServiceRegistry, params: Params) -> Any:
    url = await services.uploads.upload(params["imageBinary"], params["fileName"])
    return {"url": url}


ROUTES = (
    RelayRoute("GET", "/search-flights", search_flights, validate=require("engine")),
    RelayRoute("GET", "/get-image", get_image, validate=require("query")),
    RelayRoute(
        "GET", "/google-places-autocomplete", places_autocomplete, validate=require("input")
    ),
    RelayRoute("GET", "/google-places-details", places_details, validate=require("place_id")),
    RelayRoute("GET", "/google-places-nearby", places_nearby, validate=require("location")),
    RelayRoute(
        "POST",
        "/generate-image",
        generate_image,
        validate=require("title"),
        source=BODY,
        failure_message="Image generation failed",
    ),
    RelayRoute(
        "POST",
        "/upload-image",
        upload_image,
        validate=require("imageBinary", "fileName", message="Missing imageBinary or fileName"),
        source=BODY,
        failure_message="Image upload failed",
    ),
)

router = build_router(ROUTES)
