from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from time import perf_counter
from typing import Iterator, List, Optional

from templet.core.utils.io import ensure_directory

# "verbose" is the documentation pipeline's name for DEBUG.
VERBOSE = logging.DEBUG

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_CONFIGURED_KEY: tuple[str, str | None] | None = None
_TEMPLET_HANDLERS: List[logging.Handler] = []

logger = logging.getLogger(__name__)


def level_from_name(name: str | int | None) -> int:
    """Map a level name (``"info"``, ``"verbose"``, ...) to a logging level."""
    if isinstance(name, int):
        return name
    if not name:
        return logging.WARNING
    upper = str(name).strip().upper()
    if upper == "VERBOSE":
        return VERBOSE
    value = logging.getLevelName(upper)
    return value if isinstance(value, int) else logging.WARNING


def configure_logging(level: str | int = "WARNING", log_path: Optional[Path] = None) -> None:
    """Configure the ``templet`` logger hierarchy.

    Installs a stderr handler and, when ``log_path`` is given, a UTF-8 file
    handler. Idempotent per-process: calling again with the same level and
    path is a no-op; a different level or path replaces the handlers.
    """
    global _CONFIGURED_KEY

    resolved = str(Path(log_path).resolve()) if log_path else None
    key = (str(level_from_name(level)), resolved)
    if _CONFIGURED_KEY == key and _TEMPLET_HANDLERS:
        return

    _remove_templet_handlers()

    root = logging.getLogger("templet")
    root.setLevel(level_from_name(level))
    fmt = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(fmt)
    root.addHandler(stream_handler)
    _TEMPLET_HANDLERS.append(stream_handler)

    if resolved is not None:
        ensure_directory(Path(resolved).parent)
        fh = logging.FileHandler(resolved, encoding="utf-8")
        fh.setFormatter(fmt)
        root.addHandler(fh)
        _TEMPLET_HANDLERS.append(fh)

    _CONFIGURED_KEY = key


def _remove_templet_handlers() -> None:
    root = logging.getLogger("templet")
    while _TEMPLET_HANDLERS:
        h = _TEMPLET_HANDLERS.pop()
        root.removeHandler(h)
        h.close()


def reset_logging_for_tests() -> None:
    """Test-only: drop handlers installed by :func:`configure_logging`."""
    global _CONFIGURED_KEY
    _remove_templet_handlers()
    logging.getLogger("templet").setLevel(logging.NOTSET)
    _CONFIGURED_KEY = None


@contextmanager
def phase_scope(
    name: str,
    level: int = VERBOSE,
    *,
    log: Optional[logging.Logger] = None,
) -> Iterator[None]:
    """Bracket a phase of work with start/end log records.

    Emits ``"<name> started"`` on entry and ``"<name> completed in N ms"`` on
    exit. When the body raises, ``"<name> failed after N ms"`` is logged at the
    same level and the exception propagates.
    """
    target = log or logger
    target.log(level, "%s started", name)
    start = perf_counter()
    try:
        yield
    except BaseException:
        target.log(level, "%s failed after %.1f ms", name, (perf_counter() - start) * 1000.0)
        raise
    target.log(level, "%s completed in %.1f ms", name, (perf_counter() - start) * 1000.0)


__all__ = [
    "VERBOSE",
    "LOG_FORMAT",
    "level_from_name",
    "configure_logging",
    "reset_logging_for_tests",
    "phase_scope",
]
