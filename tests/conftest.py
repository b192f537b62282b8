import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'templet' and tests/ importable for 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from templet.core.logging import reset_logging_for_tests


@pytest.fixture(autouse=True)
def _isolate_templet_env(tmp_path_factory, monkeypatch):
    """Keep config and logging deterministic regardless of developer environment.

    TEMPLET_* variables would otherwise override config keys, and the user
    config layer would read the developer's ~/.templet.
    """
    for key in list(os.environ):
        if key.startswith("TEMPLET_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("TEMPLET_USER_DIR", str(tmp_path_factory.mktemp("templet-user")))
    reset_logging_for_tests()
    yield
    reset_logging_for_tests()


@pytest.fixture
def install_root(tmp_path: Path) -> Path:
    """An empty installation root with a ``templates/`` directory."""
    root = tmp_path / "install"
    (root / "templates").mkdir(parents=True)
    return root


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    root = tmp_path / "base"
    root.mkdir()
    return root


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "out"
