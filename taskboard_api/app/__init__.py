"""
Application package.

The code is split by layer: ``core`` (configuration, database,
security), ``repositories`` (typed table access), ``services``
(business logic), ``schemas`` (API payloads) and ``api`` (versioned
FastAPI routers).  The FastAPI application itself is built by
``main.create_app``.
"""
