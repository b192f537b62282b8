"""Shared utilities for Templet core (merging, YAML and filesystem helpers)."""
from __future__ import annotations

from .io import ensure_directory, ensure_parent_dir, iter_yaml_files, read_yaml
from .merge import deep_merge, merge_arrays

__all__ = [
    "deep_merge",
    "merge_arrays",
    "ensure_directory",
    "ensure_parent_dir",
    "iter_yaml_files",
    "read_yaml",
]
