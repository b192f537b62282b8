"""Domain configuration accessors."""
from __future__ import annotations

from .logging import LoggingConfig
from .resources import ResourcesConfig

__all__ = ["LoggingConfig", "ResourcesConfig"]
