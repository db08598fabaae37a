"""
HTTP adapter for the registration lifecycle notifier.

This package provides a FastAPI application that exposes:
- The trigger endpoint the host calls with batches of record changes
- A demo endpoint
- State label lookups
"""

from api.main import app

__all__ = ["app"]
