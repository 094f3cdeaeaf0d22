"""ASGI boundary helpers."""
