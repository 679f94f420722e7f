"""Flask front-end for the advent expedition planner."""

from .app import create_app

__all__ = ["create_app"]
