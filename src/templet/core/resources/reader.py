"""Resource readers: one directory, or several merged into one namespace.

Resource names are POSIX relative paths (``"styles/main.css"``) regardless
of platform.

Overlay precedence for :class:`CompositeResourceReader` is *last wins*: when
several directories contain the same name, the name is listed once (at the
position of its first occurrence) and its content comes from the last
directory that has it.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import BinaryIO, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple, Union

from templet.core.exceptions import ResourceSetClosedError

Pattern = Union[str, "re.Pattern[str]"]


def compile_pattern(pattern: Optional[Pattern]) -> Optional["re.Pattern[str]"]:
    """Compile a name filter. ``None`` and ``""`` mean "match everything"."""
    if pattern is None or pattern == "":
        return None
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern)


def _walk_names(directory: Path, prefix: str = "", ancestors: FrozenSet[str] = frozenset()) -> Iterator[str]:
    # Directory symlinks are followed. A directory already on the current
    # descent path (a symlink cycle) is not entered again.
    real = os.path.realpath(directory)
    if real in ancestors:
        return
    ancestors = ancestors | {real}
    # Entries are listed and the scandir handle closed before descending, so at
    # most one directory handle is open at a time.
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda e: e.name)
    for entry in entries:
        name = f"{prefix}{entry.name}"
        if entry.is_dir():
            yield from _walk_names(Path(entry.path), f"{name}/", ancestors)
        elif entry.is_file():
            yield name


@dataclass(frozen=True)
class ResourceEntry:
    """A resource yielded during enumeration; ``stream`` is open binary content."""

    name: str
    path: Path
    stream: BinaryIO


class LocalResourceReader:
    """Read resources from a single directory tree."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    @property
    def is_empty(self) -> bool:
        for _ in self.names():
            return False
        return True

    def names(self) -> Iterator[str]:
        """Yield relative names of all files, depth-first in lexicographic order."""
        if not self.directory.is_dir():
            return
        yield from _walk_names(self.directory)

    def resolve(self, name: str) -> Optional[Path]:
        """Return the file path for ``name``, or None when absent.

        Names that are absolute or climb out of the directory are absent.
        """
        rel = PurePosixPath(name)
        if not name or rel.is_absolute() or ".." in rel.parts:
            return None
        path = self.directory.joinpath(*rel.parts)
        return path if path.is_file() else None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.resolve(name) is not None

    def open(self, name: str) -> Optional[BinaryIO]:
        path = self.resolve(name)
        if path is None:
            return None
        return open(path, "rb")

    def __repr__(self) -> str:
        return f"LocalResourceReader({str(self.directory)!r})"


class CompositeResourceReader:
    """Merge several directories into a single resource namespace.

    Streams handed out by :meth:`iter_resources` and :meth:`open_resource`
    are tracked and closed by :meth:`close`. Use as a context manager::

        with CompositeResourceReader(dirs) as resources:
            for entry in resources.iter_resources(r"\\.css$"):
                ...
    """

    def __init__(self, directories: Iterable[Path]) -> None:
        self._readers: Tuple[LocalResourceReader, ...] = tuple(
            LocalResourceReader(d) for d in directories
        )
        self._open_streams: Set[BinaryIO] = set()
        self._closed = False

    @property
    def directories(self) -> List[Path]:
        return [r.directory for r in self._readers]

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def is_empty(self) -> bool:
        self._check_open()
        return all(r.is_empty for r in self._readers)

    def names(self, pattern: Optional[Pattern] = None) -> Iterator[str]:
        """Yield each distinct resource name once, in directory order."""
        self._check_open()
        regex = compile_pattern(pattern)
        for index, reader in enumerate(self._readers):
            earlier = self._readers[:index]
            for name in reader.names():
                if regex is not None and not regex.search(name):
                    continue
                if any(name in prev for prev in earlier):
                    continue
                yield name

    def __contains__(self, name: object) -> bool:
        self._check_open()
        return any(name in r for r in self._readers)

    def resolve(self, name: str) -> Optional[Path]:
        """Return the winning (last-resolved) file for ``name``."""
        for reader in reversed(self._readers):
            path = reader.resolve(name)
            if path is not None:
                return path
        return None

    def iter_resources(self, pattern: Optional[Pattern] = None) -> Iterator[ResourceEntry]:
        """Yield open resources, optionally filtered by a regex on the name.

        Each stream is closed when the consumer advances to the next entry or
        abandons the iteration.
        """
        for name in self.names(pattern):
            path = self.resolve(name)
            if path is None:
                raise FileNotFoundError(f"Resource disappeared during enumeration: {name}")
            stream = self._track(open(path, "rb"))
            try:
                yield ResourceEntry(name=name, path=path, stream=stream)
            finally:
                self._release(stream)

    def open_resource(self, name: str) -> Optional[BinaryIO]:
        """Open ``name`` for reading; the set closes it on :meth:`close`."""
        self._check_open()
        path = self.resolve(name)
        if path is None:
            return None
        return self._track(open(path, "rb"))

    def read_text(self, name: str, encoding: str = "utf-8") -> Optional[str]:
        stream = self.open_resource(name)
        if stream is None:
            return None
        try:
            return stream.read().decode(encoding)
        finally:
            self._release(stream)

    def close(self) -> None:
        """Close every stream still open. Safe to call more than once."""
        self._closed = True
        while self._open_streams:
            self._open_streams.pop().close()

    def __enter__(self) -> "CompositeResourceReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _check_open(self) -> None:
        if self._closed:
            raise ResourceSetClosedError(
                "I/O operation on closed resource set",
                context={"directories": [str(d) for d in self.directories]},
            )

    def _track(self, stream: BinaryIO) -> BinaryIO:
        self._open_streams.add(stream)
        return stream

    def _release(self, stream: BinaryIO) -> None:
        self._open_streams.discard(stream)
        stream.close()

    def __repr__(self) -> str:
        dirs = ", ".join(str(d) for d in self.directories)
        return f"CompositeResourceReader([{dirs}])"


__all__ = [
    "Pattern",
    "ResourceEntry",
    "LocalResourceReader",
    "CompositeResourceReader",
    "compile_pattern",
]
