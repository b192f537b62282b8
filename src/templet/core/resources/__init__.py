"""Template and theme resource resolution and export.

Bundles are resolved from (low → high precedence):
  <install_root>/templates/<name> → <base_dir>/<name>

and merged into one namespace where the last-resolved directory wins for
names that appear more than once.
"""
from __future__ import annotations

from .exporter import ExportResult, ResourceExporter, copy_resource
from .manager import ResourceManager, TemplateProcessorFactory
from .reader import CompositeResourceReader, LocalResourceReader, ResourceEntry, compile_pattern
from .resolver import BundlePathResolver, candidate_directories, iter_bundle_directories

__all__ = [
    "BundlePathResolver",
    "candidate_directories",
    "iter_bundle_directories",
    "CompositeResourceReader",
    "LocalResourceReader",
    "ResourceEntry",
    "compile_pattern",
    "ExportResult",
    "ResourceExporter",
    "copy_resource",
    "ResourceManager",
    "TemplateProcessorFactory",
]
