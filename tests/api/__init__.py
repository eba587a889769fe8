"""HTTP route tests through the ASGI app."""
