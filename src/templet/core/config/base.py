"""Base class for domain-specific configuration accessors.

Provides a standardized pattern for domain configs with:
- A shared, lazily loaded ConfigManager
- Consistent base_dir handling
- Type-safe section access
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Optional

from .manager import ConfigManager


class BaseDomainConfig(ABC):
    """Abstract base class for domain-specific configuration accessors.

    Usage:
        class MyConfig(BaseDomainConfig):
            def _config_section(self) -> str:
                return "mySection"

            @cached_property
            def my_setting(self) -> str:
                return self.section.get("mySetting", "default")

        cfg = MyConfig(base_dir=Path("/path/to/docs"))
        print(cfg.my_setting)
    """

    def __init__(
        self,
        base_dir: Optional[Path] = None,
        *,
        manager: Optional[ConfigManager] = None,
    ) -> None:
        self._manager = manager or ConfigManager(base_dir)

    @property
    def config_base_dir(self) -> Path:
        """Directory the configuration was loaded for."""
        return self._manager.base_dir

    @abstractmethod
    def _config_section(self) -> str:
        """Return the top-level config key for this domain."""
        ...

    @cached_property
    def section(self) -> Dict[str, Any]:
        """Get this domain's configuration section (empty dict when absent)."""
        value = self._manager.load_config(validate=True).get(self._config_section())
        return value if isinstance(value, dict) else {}

    def _resolve_path(self, raw: Any) -> Optional[Path]:
        """Resolve a configured directory; relative paths are base-dir relative."""
        if raw is None or str(raw).strip() == "":
            return None
        p = Path(str(raw).strip()).expanduser()
        if not p.is_absolute():
            p = self.config_base_dir / p
        return p.resolve()


__all__ = ["BaseDomainConfig"]
