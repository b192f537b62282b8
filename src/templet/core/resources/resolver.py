"""Bundle search-path resolution.

A bundle name is looked up in two tiers, in order:

  1. ``<install_root>/templates/<name>`` (bundled with the package)
  2. ``<base_dir>/<name>`` (user supplied)

Every tier that exists is yielded, so a user bundle can overlay the bundled
one of the same name.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple

from templet.data import get_install_root

TEMPLATES_SEGMENT = "templates"


def candidate_directories(
    name: str,
    base_dir: Path,
    *,
    install_root: Optional[Path] = None,
) -> Tuple[Path, Path]:
    """Return the two candidate directories for ``name`` (existing or not)."""
    root = Path(install_root) if install_root is not None else get_install_root()
    return (
        (root / TEMPLATES_SEGMENT / name).resolve(),
        (Path(base_dir) / name).resolve(),
    )


def iter_bundle_directories(
    names: Iterable[str],
    base_dir: Path,
    *,
    install_root: Optional[Path] = None,
) -> Iterator[Path]:
    """Yield existing directories for ``names``.

    Order is name order, then install root before base directory within a
    name. Missing candidates are skipped silently.
    """
    for name in names:
        for directory in candidate_directories(name, base_dir, install_root=install_root):
            if directory.is_dir():
                yield directory


class BundlePathResolver:
    """Resolve bundle names against a fixed install root and base directory."""

    def __init__(self, base_dir: Path, *, install_root: Optional[Path] = None) -> None:
        self.base_dir = Path(base_dir)
        self.install_root = Path(install_root) if install_root is not None else get_install_root()

    def resolve(self, names: Iterable[str]) -> Iterator[Path]:
        return iter_bundle_directories(names, self.base_dir, install_root=self.install_root)

    def __repr__(self) -> str:
        return f"BundlePathResolver(base_dir={self.base_dir!r}, install_root={self.install_root!r})"


__all__ = [
    "TEMPLATES_SEGMENT",
    "BundlePathResolver",
    "candidate_directories",
    "iter_bundle_directories",
]
