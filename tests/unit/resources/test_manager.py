"""Tests for the template/theme resource facade."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List

import pytest

from helpers.trees import read_tree, write_tree
from templet.core.exceptions import ConfigurationError
from templet.core.resources import CompositeResourceReader, ResourceExporter, ResourceManager


@pytest.fixture
def bundles(install_root: Path, base_dir: Path) -> None:
    write_tree(install_root / "templates" / "default", {"layout.html": "<base/>", "styles/main.css": "base"})
    write_tree(base_dir / "default", {"layout.html": "<custom/>"})
    write_tree(base_dir / "site", {"index.html": "<index/>"})
    write_tree(install_root / "templates" / "dark", {"styles/main.css": "dark"})
    write_tree(base_dir / "accent", {"styles/accent.css": "accent"})


def _manager(install_root: Path, base_dir: Path, templates=("default",), themes=None, **kwargs) -> ResourceManager:
    return ResourceManager(templates, themes=themes, base_dir=base_dir, install_root=install_root, **kwargs)


def test_names_are_kept_as_immutable_snapshots(install_root: Path, base_dir: Path) -> None:
    templates: List[str] = ["default"]
    themes: List[str] = ["dark"]
    manager = _manager(install_root, base_dir, templates, themes)

    templates.append("site")
    themes.clear()

    assert manager.templates == ("default",)
    assert manager.themes == ("dark",)


def test_base_dir_defaults_to_working_directory_at_construction(
    install_root: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    first = tmp_path / "first"
    first.mkdir()
    monkeypatch.chdir(first)
    manager = ResourceManager(["default"], install_root=install_root)

    monkeypatch.chdir(tmp_path)

    assert manager.base_dir.resolve() == first.resolve()


@pytest.mark.usefixtures("bundles")
def test_get_template_directories_orders_install_root_first(install_root: Path, base_dir: Path) -> None:
    manager = _manager(install_root, base_dir, ("default", "site"))

    assert list(manager.get_template_directories()) == [
        (install_root / "templates" / "default").resolve(),
        (base_dir / "default").resolve(),
        (base_dir / "site").resolve(),
    ]


@pytest.mark.usefixtures("bundles")
def test_create_template_resource_returns_open_merged_set(install_root: Path, base_dir: Path) -> None:
    resources = _manager(install_root, base_dir, ("default", "site")).create_template_resource()
    try:
        assert not resources.closed
        assert list(resources.names()) == ["layout.html", "styles/main.css", "index.html"]
        assert resources.read_text("layout.html") == "<custom/>"
    finally:
        resources.close()


@pytest.mark.usefixtures("bundles")
def test_create_template_processor_hands_over_the_set(install_root: Path, base_dir: Path) -> None:
    calls: List[Any] = []

    def factory(resources: CompositeResourceReader, context: Any, max_parallelism: int) -> str:
        calls.append((resources, context, max_parallelism))
        return "processor"

    result = _manager(install_root, base_dir).create_template_processor(factory, {"site": "x"}, 4)

    assert result == "processor"
    resources, context, hint = calls[0]
    assert isinstance(resources, CompositeResourceReader)
    assert not resources.closed
    assert context == {"site": "x"}
    assert hint == 4
    resources.close()


@pytest.mark.usefixtures("bundles")
def test_export_templates_overwrites_existing_output(install_root: Path, base_dir: Path, output_dir: Path) -> None:
    write_tree(output_dir, {"layout.html": "stale"})

    assert _manager(install_root, base_dir, ("default", "site")).export_templates(output_dir) is True

    assert read_tree(output_dir) == {
        "index.html": "<index/>",
        "layout.html": "<custom/>",
        "styles/main.css": "base",
    }


@pytest.mark.usefixtures("bundles")
def test_export_templates_with_filter(install_root: Path, base_dir: Path, output_dir: Path) -> None:
    _manager(install_root, base_dir).export_templates(output_dir, pattern=r"\.css$")

    assert read_tree(output_dir) == {"styles/main.css": "base"}


def test_export_templates_unknown_bundles_warns(
    install_root: Path, base_dir: Path, output_dir: Path, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.WARNING, logger="templet")

    assert _manager(install_root, base_dir, ("nope", "nada")).export_templates(output_dir) is False
    assert "No resource found for [nope, nada]." in caplog.messages
    assert not output_dir.exists()


def test_export_templates_without_names_writes_nothing(install_root: Path, base_dir: Path, output_dir: Path) -> None:
    assert _manager(install_root, base_dir, ()).export_templates(output_dir) is False
    assert not output_dir.exists()


@pytest.mark.parametrize("bad", [None, "", "   ", Path("")])
def test_missing_output_dir_is_a_configuration_error(install_root: Path, base_dir: Path, bad) -> None:
    manager = _manager(install_root, base_dir, themes=["dark"])

    with pytest.raises(ConfigurationError):
        manager.export_templates(bad)
    with pytest.raises(ConfigurationError):
        manager.apply_themes(bad, overwrite=True)


@pytest.mark.usefixtures("bundles")
def test_export_logs_phase_markers(
    install_root: Path, base_dir: Path, output_dir: Path, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.DEBUG, logger="templet")

    _manager(install_root, base_dir).export_templates(output_dir)

    assert "ExportResourceFiles started" in caplog.messages
    assert any(m.startswith("ExportResourceFiles completed in") for m in caplog.messages)


@pytest.mark.usefixtures("bundles")
def test_export_releases_the_set_when_exporter_fails(install_root: Path, base_dir: Path, output_dir: Path) -> None:
    seen: List[CompositeResourceReader] = []

    class ExplodingExporter(ResourceExporter):
        def export(self, resources, output_dir, **kwargs) -> bool:
            seen.append(resources)
            next(resources.iter_resources())
            raise RuntimeError("disk on fire")

    manager = _manager(install_root, base_dir, exporter=ExplodingExporter())

    with pytest.raises(RuntimeError):
        manager.export_templates(output_dir)

    assert seen and seen[0].closed


@pytest.mark.usefixtures("bundles")
def test_apply_themes_without_themes_is_a_no_op(
    install_root: Path, base_dir: Path, output_dir: Path, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.DEBUG, logger="templet")

    _manager(install_root, base_dir, themes=None).apply_themes(output_dir, overwrite=True)
    _manager(install_root, base_dir, themes=[]).apply_themes(output_dir, overwrite=True)

    assert not output_dir.exists()
    assert not any("applied" in m for m in caplog.messages)
    assert caplog.messages.count("Apply Theme started") == 2


@pytest.mark.usefixtures("bundles")
def test_apply_themes_keeps_existing_files_without_overwrite(
    install_root: Path, base_dir: Path, output_dir: Path, caplog: pytest.LogCaptureFixture
) -> None:
    write_tree(output_dir, {"styles/main.css": "mine"})
    caplog.set_level(logging.INFO, logger="templet")

    _manager(install_root, base_dir, themes=["dark", "accent"]).apply_themes(output_dir, overwrite=False)

    assert read_tree(output_dir) == {"styles/main.css": "mine", "styles/accent.css": "accent"}
    assert "Theme(s) dark, accent applied." in caplog.messages


@pytest.mark.usefixtures("bundles")
def test_apply_themes_with_overwrite_replaces_files(install_root: Path, base_dir: Path, output_dir: Path) -> None:
    manager = _manager(install_root, base_dir, themes=["dark"])
    manager.export_templates(output_dir)

    manager.apply_themes(output_dir, overwrite=True)

    assert (output_dir / "styles" / "main.css").read_text(encoding="utf-8") == "dark"
    assert (output_dir / "layout.html").read_text(encoding="utf-8") == "<custom/>"


def test_apply_themes_logs_applied_even_when_nothing_matches(
    install_root: Path, base_dir: Path, output_dir: Path, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO, logger="templet")

    _manager(install_root, base_dir, themes=["ghost"]).apply_themes(output_dir, overwrite=False)

    assert "No resource found for [ghost]." in caplog.messages
    assert "Theme(s) ghost applied." in caplog.messages


@pytest.mark.usefixtures("bundles")
def test_empty_path_output_dir_never_writes_to_working_directory(
    install_root: Path, base_dir: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    cwd = tmp_path / "cwd"
    cwd.mkdir()
    monkeypatch.chdir(cwd)

    with pytest.raises(ConfigurationError):
        _manager(install_root, base_dir).export_templates(Path(""))

    assert list(cwd.iterdir()) == []
