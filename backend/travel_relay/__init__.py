"""
Travel Relay — Application Package Initializer
================================================

What: Backend relay between the travel-planning front-end and its third-party
      providers (SerpApi, Google Places, OpenAI Images, Amazon S3).

Architecture Note:

    ┌─────────────────────────────────────┐
    │     Middleware (ID, log, CORS)      │  ← applied to every response
    ├─────────────────────────────────────┤
    │        Route Table (routes/)        │  ← parse → validate → call → relay
    ├─────────────────────────────────────┤
    │      Upstream Services (services/)  │  ← one provider call, key injected
    ├─────────────────────────────────────┤
    │      Settings (config.py)           │  ← immutable, read once at startup
    └─────────────────────────────────────┘

    Nothing is persisted; every request is independent.
"""

__version__ = "1.0.0"
