# Routes package init
"""
Travel Relay — API Routes Package
===================================

What:  The route table and the endpoint wrapper every row shares.

Modules:
    - table.py:  RelayRoute, presence validators, make_endpoint(), build_router()
    - relay.py:  The seven relay rows and the mounted `router`

Routes stay THIN: extract parameters, check presence, call one service,
return its JSON. Anything that is not on the table is a 404
{"error": "Invalid route"} (see the HTTPException handler in main.py).
"""
