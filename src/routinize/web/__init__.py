"""Web API for routinize."""

from .app import create_app

__all__ = ["create_app"]
