"""HTTP relay in front of the completion provider."""

from .main import create_app, serve

__all__ = ["create_app", "serve"]
