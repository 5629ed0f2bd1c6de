"""Endpoint routers, one module per entity kind."""
