"""HTTP API for PropSmith."""

from .app import create_app

__all__ = ["create_app"]
