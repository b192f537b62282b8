"""
Templet configuration management (layered YAML + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from templet.core.exceptions import ConfigurationError
from templet.core.utils.io import iter_yaml_files, read_yaml
from templet.core.utils.merge import deep_merge
from templet.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "TEMPLET_"
USER_DIR_ENV = "TEMPLET_USER_DIR"
PROJECT_CONFIG_DIRNAME = ".templet"
CONFIG_SCHEMA = "config.schema.yaml"

# Env vars with the TEMPLET_ prefix that locate config rather than set keys.
_RESERVED_ENV_KEYS = frozenset({USER_DIR_ENV})


def get_user_config_dir() -> Path:
    """Return the user-level Templet directory (``~/.templet`` by default)."""
    raw = os.environ.get(USER_DIR_ENV)
    if raw and raw.strip():
        return Path(os.path.expandvars(raw.strip())).expanduser()
    return Path.home() / PROJECT_CONFIG_DIRNAME


class ConfigManager:
    """Load, merge, and validate Templet configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: TEMPLET_<section>__<key>
    2. Project config: <base_dir>/.templet/config/*.yaml (alphabetical order)
    3. User config: ~/.templet/config/*.yaml (alphabetical order)
    4. Bundled defaults: templet.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, base_dir: Optional[Path] = None, *, user_dir: Optional[Path] = None) -> None:
        self.base_dir = Path(base_dir).resolve() if base_dir is not None else Path.cwd()
        user_root_dir = Path(user_dir) if user_dir is not None else get_user_config_dir()

        self.core_config_dir = get_data_path("config")
        self.user_config_dir = user_root_dir / "config"
        self.project_config_dir = self.base_dir / PROJECT_CONFIG_DIRNAME / "config"
        self.schemas_dir = get_data_path("schemas")

        self._cache: Dict[bool, Dict[str, Any]] = {}

    # ---------- Environment overrides ----------

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        if value.strip().lower() in {"null", "none"}:
            return None
        return value.strip()

    def _parse_env_key(self, raw: str) -> List[str]:
        segs = raw.split("__") if "__" in raw else raw.split("_", 1)
        if any(seg == "" for seg in segs):
            return []
        return [seg.lower() for seg in segs]

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX) or key in _RESERVED_ENV_KEYS:
                continue
            path = self._parse_env_key(key[len(ENV_PREFIX):])
            if not path:
                logger.warning("Ignoring malformed %s* variable: %s", ENV_PREFIX, key)
                continue
            yield path, self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur = root
        for part in path[:-1]:
            nxt = cur.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[part] = nxt
            cur = nxt
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            self._set_nested(cfg, path, typed_value)

    # ---------- Loading ----------

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        """Merge every YAML file of ``directory`` into ``cfg`` (missing dir: no-op)."""
        for path in iter_yaml_files(directory):
            # Fail closed: configuration must never silently ignore invalid YAML.
            data = read_yaml(path, default={}, raise_on_error=True) or {}
            if not isinstance(data, dict):
                raise ConfigurationError(
                    f"Config file must contain a YAML mapping: {path}",
                    context={"path": str(path)},
                )
            cfg = deep_merge(cfg, data)
        return cfg

    def _load_config_uncached(self, validate: bool = True) -> Dict[str, Any]:
        cfg: Dict[str, Any] = {}
        cfg = self._load_directory(self.core_config_dir, cfg)
        cfg = self._load_directory(self.user_config_dir, cfg)
        cfg = self._load_directory(self.project_config_dir, cfg)
        self.apply_env_overrides(cfg)

        if validate:
            self.validate_schema(cfg, CONFIG_SCHEMA)
        return cfg

    def validate_schema(self, config: Dict[str, Any], schema_name: str) -> None:
        from templet.core.config.validation import validate_payload

        validate_payload(config, schema_name, schemas_dir=self.schemas_dir)

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load (and cache per instance) the merged configuration.

        The returned dict should be treated as immutable.
        """
        cached = self._cache.get(validate)
        if cached is None:
            cached = self._load_config_uncached(validate=validate)
            self._cache[validate] = cached
        return cached

    def get_all(self) -> Dict[str, Any]:
        """Get full merged configuration."""
        return self.load_config(validate=False)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-notation key.

        Example:
            >>> manager.get('resources.templates')
            ['default']
            >>> manager.get('nonexistent.key', 'fallback')
            'fallback'
        """
        current: Union[Dict[str, Any], Any] = self.load_config(validate=False)
        for part in key.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    def clear_cache(self) -> None:
        self._cache.clear()


__all__ = ["ConfigManager", "ENV_PREFIX", "USER_DIR_ENV", "get_user_config_dir"]
