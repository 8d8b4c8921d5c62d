"""Web interface for the sushi battle."""

from .app import create_app

__all__ = ["create_app"]
