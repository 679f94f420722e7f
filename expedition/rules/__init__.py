"""Assignment and estimation rules."""

from . import estimation, targeting

__all__ = ["estimation", "targeting"]
