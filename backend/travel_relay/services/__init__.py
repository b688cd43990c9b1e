# Services package init
"""
Travel Relay — Services Layer
===============================

What:  One service per upstream provider, sitting between the route table
       (HTTP) and the third-party APIs.
How:   Services accept plain parameters, inject the server-held credential,
       make one call and return the decoded result. They know nothing about
       CORS, status codes or the request object.

Service Inventory:
    - UpstreamClient: Shared httpx wrapper (one call, JSON decode, error shaping)
    - FlightDataService: SerpApi flight search and image search
    - PlacesService: Google Places autocomplete, details, nearby airports
    - ImageGenerationService: OpenAI logo generation (base64)
    - ObjectStorage (abstract) / S3ObjectStorage: Object store for uploads
    - ImageUploadService: Data-URL decode → object store
    - ServiceRegistry: Container built from Settings by create_app()
"""
