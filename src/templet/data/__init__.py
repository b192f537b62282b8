"""
Templet data resource helpers.

Provides access to the files shipped with the package: bundled config
defaults, schemas, and the built-in template and theme bundles under
``templates/``.
"""

from __future__ import annotations

from importlib import resources
from pathlib import Path


def get_install_root() -> Path:
    """Return the installation root that holds the bundled ``templates/`` tree."""
    return Path(str(resources.files("templet.data")))


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """
    Get absolute path to a data file or directory.

    Args:
        subpackage: Name of the data subdirectory (e.g., "config", "templates")
        filename: Optional filename within the subdirectory

    Returns:
        Absolute path to the file or directory

    Example:
        >>> get_data_path("config", "defaults.yaml")
        PosixPath('/path/to/templet/data/config/defaults.yaml')
    """
    base = get_install_root() / subpackage
    return base / filename if filename else base


__all__ = ["get_install_root", "get_data_path"]
