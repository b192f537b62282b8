"""Templet configuration system.

Usage:
    from templet.core.config import ConfigManager, ResourcesConfig

    manager = ConfigManager(base_dir=Path("/path/to/docs"))
    config = manager.load_config()

    resources = ResourcesConfig(manager=manager)
    resources.templates
"""
from __future__ import annotations

from .base import BaseDomainConfig
from .domains import LoggingConfig, ResourcesConfig
from .manager import ConfigManager

__all__ = [
    "ConfigManager",
    "BaseDomainConfig",
    "LoggingConfig",
    "ResourcesConfig",
]
