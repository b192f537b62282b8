"""Template and theme resource facade.

Usage:
    manager = ResourceManager(["default", "mysite"], themes=["dark"], base_dir=Path("docs"))
    manager.export_templates(Path("_site"))
    manager.apply_themes(Path("_site"), overwrite=True)

    with manager.create_template_resource() as resources:
        layout = resources.read_text("layout.html")
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Optional, Protocol, Sequence, Tuple, TypeVar

from templet.core.exceptions import ConfigurationError
from templet.core.logging import VERBOSE, phase_scope
from templet.core.resources.exporter import ResourceExporter
from templet.core.resources.reader import CompositeResourceReader, Pattern
from templet.core.resources.resolver import iter_bundle_directories

if TYPE_CHECKING:
    from templet.core.config.domains import ResourcesConfig

logger = logging.getLogger(__name__)

P = TypeVar("P", covariant=True)


def _is_blank_dir(output_dir: Any) -> bool:
    """True for ``None``, blank strings and ``Path("")`` (which is ``Path(".")``)."""
    if output_dir is None:
        return True
    if isinstance(output_dir, str):
        return not output_dir.strip()
    return Path(output_dir) == Path("")


class TemplateProcessorFactory(Protocol[P]):
    """Builds a downstream template processor from the merged template set."""

    def __call__(self, resources: CompositeResourceReader, context: Any, max_parallelism: int) -> P: ...


class ResourceManager:
    """Resolve, merge and export template and theme bundles.

    The working-directory default for ``base_dir`` is captured once, at
    construction.
    """

    def __init__(
        self,
        templates: Iterable[str],
        themes: Optional[Iterable[str]] = None,
        base_dir: Optional[Path] = None,
        *,
        install_root: Optional[Path] = None,
        exporter: Optional[ResourceExporter] = None,
    ) -> None:
        self._templates: Tuple[str, ...] = tuple(templates)
        self._themes: Optional[Tuple[str, ...]] = tuple(themes) if themes is not None else None
        self._base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
        self._install_root = Path(install_root) if install_root is not None else None
        self._exporter = exporter or ResourceExporter()

    @classmethod
    def from_config(cls, config: "ResourcesConfig", **kwargs: Any) -> "ResourceManager":
        return cls(config.templates, themes=config.themes, base_dir=config.base_dir, **kwargs)

    @property
    def templates(self) -> Tuple[str, ...]:
        return self._templates

    @property
    def themes(self) -> Optional[Tuple[str, ...]]:
        return self._themes

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def get_template_directories(self) -> Iterator[Path]:
        """Yield the resolved directories of the configured templates."""
        return self._get_directories(self._templates)

    def create_template_resource(self) -> CompositeResourceReader:
        """Return the merged template set. The caller must close it."""
        return self._create_resource(self._templates)

    def create_template_processor(
        self,
        factory: TemplateProcessorFactory[P],
        context: Any,
        max_parallelism: int,
    ) -> P:
        """Hand a fresh merged template set to ``factory``, which then owns it."""
        return factory(self.create_template_resource(), context, max_parallelism)

    def export_templates(self, output_dir: Path, pattern: Optional[Pattern] = None) -> bool:
        """Export template bundles into ``output_dir``, overwriting existing files."""
        return self._export_resource_files(self._templates, output_dir, overwrite=True, pattern=pattern)

    def apply_themes(self, output_dir: Path, overwrite: bool) -> None:
        """Export theme bundles into ``output_dir``. No-op without themes."""
        with phase_scope("Apply Theme", VERBOSE, log=logger):
            if self._themes:
                self._export_resource_files(self._themes, output_dir, overwrite=overwrite)
                logger.info("Theme(s) %s applied.", ", ".join(self._themes))

    def _get_directories(self, names: Iterable[str]) -> Iterator[Path]:
        return iter_bundle_directories(names, self._base_dir, install_root=self._install_root)

    def _create_resource(self, names: Iterable[str]) -> CompositeResourceReader:
        return CompositeResourceReader(self._get_directories(names))

    def _export_resource_files(
        self,
        names: Sequence[str],
        output_dir: Path,
        *,
        overwrite: bool,
        pattern: Optional[Pattern] = None,
    ) -> bool:
        if _is_blank_dir(output_dir):
            raise ConfigurationError(
                "output_dir is required",
                context={"bundles": list(names)},
            )
        if not names:
            return False

        with phase_scope("ExportResourceFiles", VERBOSE, log=logger):
            with self._create_resource(names) as resources:
                return self._exporter.export(
                    resources,
                    Path(output_dir),
                    overwrite=overwrite,
                    pattern=pattern,
                    bundles=names,
                )

    def __repr__(self) -> str:
        return (
            f"ResourceManager(templates={list(self._templates)!r}, "
            f"themes={list(self._themes) if self._themes is not None else None!r}, "
            f"base_dir={str(self._base_dir)!r})"
        )


__all__ = ["ResourceManager", "TemplateProcessorFactory"]
