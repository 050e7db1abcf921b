"""Carts domain API package."""

from carts.api.errors import register_error_handlers
from carts.api.routes import router

__all__ = ["register_error_handlers", "router"]
