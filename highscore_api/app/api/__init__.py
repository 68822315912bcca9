"""
API package containing the HTTP routes.

``router`` aggregates the endpoint routers defined in ``endpoints``
and is included by the application factory.
"""
