"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

from templet.core.config import ConfigManager, ResourcesConfig
from templet.core.exceptions import ConfigurationError
from templet.core.resources import ResourceManager


def get_base_dir(args: argparse.Namespace) -> Path:
    """Get the base directory from ``--base-dir`` or the working directory."""
    raw = getattr(args, "base_dir", None)
    if raw:
        return Path(raw).expanduser().resolve()
    return Path.cwd()


def get_resources_config(args: argparse.Namespace) -> ResourcesConfig:
    return ResourcesConfig(manager=ConfigManager(get_base_dir(args)))


def build_resource_manager(args: argparse.Namespace, config: Optional[ResourcesConfig] = None) -> ResourceManager:
    """Build a ResourceManager from config, with CLI overrides applied."""
    cfg = config or get_resources_config(args)
    templates = getattr(args, "templates", None) or cfg.templates
    themes = getattr(args, "themes", None) or cfg.themes
    return ResourceManager(templates, themes=themes, base_dir=cfg.base_dir)


def get_output_dir(args: argparse.Namespace, config: ResourcesConfig) -> Path:
    """Resolve the output directory from ``--output`` or config.

    Raises:
        ConfigurationError: When neither provides one.
    """
    raw = getattr(args, "output_dir", None)
    if raw:
        return Path(raw).expanduser().resolve()
    if config.output_dir is not None:
        return config.output_dir
    raise ConfigurationError(
        "No output directory: pass --output or set resources.output_dir",
        context={"base_dir": str(config.config_base_dir)},
    )


__all__ = ["get_base_dir", "get_resources_config", "build_resource_manager", "get_output_dir"]
