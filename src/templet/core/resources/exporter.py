"""Copy resources from a resource set into an output directory.

Each file is handled on its own. A destination that cannot be opened or
written (typically ``FileExistsError`` when overwriting is disabled) is
logged at INFO and skipped; the rest of the batch continues. Failures
reading the *source* are not absorbed and propagate to the caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Sequence, Union

from templet.core.exceptions import ResourceReadError
from templet.core.logging import VERBOSE
from templet.core.resources.reader import CompositeResourceReader, Pattern
from templet.core.utils.io import ensure_parent_dir

logger = logging.getLogger(__name__)

COPY_BUFSIZE = 64 * 1024


@dataclass
class ExportResult:
    """Outcome of an export; truthy iff at least one file was written."""

    written: int = 0
    skipped: int = 0

    def __bool__(self) -> bool:
        return self.written > 0

    def to_dict(self) -> dict:
        return {"written": self.written, "skipped": self.skipped}


def _read_chunks(stream: BinaryIO, source: Union[str, Path]) -> Iterator[bytes]:
    while True:
        try:
            chunk = stream.read(COPY_BUFSIZE)
        except OSError as exc:
            raise ResourceReadError(
                f"Failed to read resource {source}: {exc}",
                context={"source": str(source)},
            ) from exc
        if not chunk:
            return
        yield chunk


def copy_resource(stream: BinaryIO, file_path: Path, *, overwrite: bool, source: str = "") -> bool:
    """Stream ``stream`` into ``file_path``.

    Opens the destination with ``"wb"`` when ``overwrite`` is set, otherwise
    with ``"xb"`` so an existing file is never touched. Returns False (after
    logging at INFO) when the destination could not be created or written.
    """
    mode = "wb" if overwrite else "xb"
    try:
        ensure_parent_dir(file_path)
        out = open(file_path, mode)
    except OSError as exc:
        logger.info("File %s: %s, skipped", file_path, exc.strerror or exc)
        return False

    try:
        with out:
            for chunk in _read_chunks(stream, source or file_path):
                out.write(chunk)
    except OSError as exc:
        logger.info("File %s: %s, skipped", file_path, exc.strerror or exc)
        return False
    return True


class ResourceExporter:
    """Materialize a :class:`CompositeResourceReader` into a directory."""

    def export_resources(
        self,
        resources: CompositeResourceReader,
        output_dir: Path,
        *,
        overwrite: bool,
        pattern: Optional[Pattern] = None,
        bundles: Sequence[str] = (),
    ) -> ExportResult:
        result = ExportResult()
        if resources.is_empty:
            logger.warning("No resource found for [%s].", ", ".join(bundles))
            return result

        output_dir = Path(output_dir)
        for entry in resources.iter_resources(pattern):
            output_path = output_dir / entry.name
            if copy_resource(entry.stream, output_path, overwrite=overwrite, source=str(entry.path)):
                result.written += 1
                logger.log(VERBOSE, "File %s copied to %s.", entry.name, output_path)
            else:
                result.skipped += 1
        return result

    def export(
        self,
        resources: CompositeResourceReader,
        output_dir: Path,
        *,
        overwrite: bool,
        pattern: Optional[Pattern] = None,
        bundles: Sequence[str] = (),
    ) -> bool:
        """Export ``resources``; True iff at least one file was written."""
        return bool(
            self.export_resources(
                resources,
                output_dir,
                overwrite=overwrite,
                pattern=pattern,
                bundles=bundles,
            )
        )


__all__ = ["COPY_BUFSIZE", "ExportResult", "ResourceExporter", "copy_resource"]
