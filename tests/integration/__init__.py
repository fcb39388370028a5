"""Integration tests for the HTTP API working against a real workspace.

Uses the FastAPI app through httpx's ASGI transport, with a short-delay
stub responder in place of the default one.
"""
