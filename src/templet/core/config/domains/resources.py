"""Domain-specific configuration for template and theme resources."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import List, Optional

from ..base import BaseDomainConfig


class ResourcesConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "resources"

    @cached_property
    def templates(self) -> List[str]:
        return [str(t) for t in (self.section.get("templates") or []) if t]

    @cached_property
    def themes(self) -> Optional[List[str]]:
        raw = self.section.get("themes")
        if raw is None:
            return None
        return [str(t) for t in raw if t]

    @cached_property
    def base_dir(self) -> Path:
        """Bundle base directory; defaults to the config base directory."""
        return self._resolve_path(self.section.get("base_dir")) or self.config_base_dir

    @cached_property
    def output_dir(self) -> Optional[Path]:
        return self._resolve_path(self.section.get("output_dir"))

    @cached_property
    def overwrite(self) -> bool:
        return bool(self.section.get("overwrite", False))

    @cached_property
    def filter(self) -> Optional[str]:
        raw = self.section.get("filter")
        return str(raw) if raw else None


__all__ = ["ResourcesConfig"]
