"""End-to-end tests for the resources and config CLI commands."""
from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from helpers.trees import read_tree, write_tree
from templet.cli._dispatcher import main
from templet.data import get_data_path


@pytest.fixture
def project(base_dir: Path) -> Path:
    write_tree(base_dir / "site", {"index.html": "<index/>", "styles/site.css": "site"})
    write_tree(base_dir / "default", {"layout.html": "<custom/>"})
    return base_dir


def _write_project_config(base_dir: Path, data) -> None:
    path = base_dir / ".templet" / "config" / "project.yaml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data), encoding="utf-8")


def test_export_writes_template_files(project: Path, output_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["resources", "export", "--base-dir", str(project), "-t", "site", "-o", str(output_dir), "--json"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "success"
    assert payload["exported"] is True
    assert payload["templates"] == ["site"]
    assert read_tree(output_dir) == {"index.html": "<index/>", "styles/site.css": "site"}


def test_export_overlays_user_bundle_on_bundled_default(project: Path, output_dir: Path) -> None:
    assert main(["resources", "export", "--base-dir", str(project), "-o", str(output_dir)]) == 0

    exported = read_tree(output_dir)
    assert exported["layout.html"] == "<custom/>"
    bundled_css = get_data_path("templates", "default").joinpath("styles", "main.css").read_text(encoding="utf-8")
    assert exported["styles/main.css"] == bundled_css


def test_export_uses_output_dir_and_filter_from_config(project: Path) -> None:
    _write_project_config(
        project, {"resources": {"templates": ["site"], "output_dir": "_site", "filter": r"\.css$"}}
    )

    assert main(["resources", "export", "--base-dir", str(project)]) == 0

    assert read_tree(project / "_site") == {"styles/site.css": "site"}


def test_export_without_output_dir_fails(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["resources", "export", "--base-dir", str(project), "-t", "site"]) == 1

    assert "No output directory" in capsys.readouterr().err


def test_export_error_in_json_mode_carries_context(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["resources", "export", "--base-dir", str(project), "--json"]) == 1

    payload = json.loads(capsys.readouterr().err)
    assert payload["error"] == "resources_export_error"
    assert payload["context"]["base_dir"] == str(project.resolve())


def test_export_of_unknown_bundle_reports_nothing_exported(
    project: Path, output_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = main(["resources", "export", "--base-dir", str(project), "-t", "ghost", "-o", str(output_dir)])

    assert code == 0
    captured = capsys.readouterr()
    assert "Nothing exported for [ghost]" in captured.out
    assert "No resource found for [ghost]." in captured.err


def test_debug_log_level_shows_phase_markers(
    project: Path, output_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    argv = ["--log-level", "verbose", "resources", "export", "--base-dir", str(project), "-t", "site", "-o", str(output_dir)]

    assert main(argv) == 0

    err = capsys.readouterr().err
    assert "ExportResourceFiles started" in err
    assert "File index.html copied to" in err


def test_log_file_from_flag(project: Path, output_dir: Path, tmp_path: Path) -> None:
    log_path = tmp_path / "run.log"
    argv = [
        "--log-level", "INFO", "--log-file", str(log_path),
        "resources", "theme", "--base-dir", str(project), "--theme", "dark", "-o", str(output_dir),
    ]

    assert main(argv) == 0

    assert "Theme(s) dark applied." in log_path.read_text(encoding="utf-8")


def test_theme_keeps_existing_files_by_default(project: Path, output_dir: Path) -> None:
    write_tree(output_dir, {"styles/main.css": "mine"})

    assert main(["resources", "theme", "--base-dir", str(project), "--theme", "dark", "-o", str(output_dir)]) == 0

    assert (output_dir / "styles" / "main.css").read_text(encoding="utf-8") == "mine"


def test_theme_overwrite_flag_replaces_files(project: Path, output_dir: Path) -> None:
    write_tree(output_dir, {"styles/main.css": "mine"})
    dark_css = get_data_path("templates", "dark").joinpath("styles", "main.css").read_text(encoding="utf-8")

    code = main(
        ["resources", "theme", "--base-dir", str(project), "--theme", "dark", "-o", str(output_dir), "--overwrite"]
    )

    assert code == 0
    assert (output_dir / "styles" / "main.css").read_text(encoding="utf-8") == dark_css


def test_theme_overwrite_from_config(project: Path, output_dir: Path) -> None:
    _write_project_config(project, {"resources": {"themes": ["dark"], "overwrite": True}})
    write_tree(output_dir, {"styles/main.css": "mine"})

    assert main(["resources", "theme", "--base-dir", str(project), "-o", str(output_dir)]) == 0

    assert (output_dir / "styles" / "main.css").read_text(encoding="utf-8") != "mine"


def test_theme_without_themes_is_a_no_op(
    project: Path, output_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["resources", "theme", "--base-dir", str(project), "-o", str(output_dir)]) == 0

    assert "No themes configured" in capsys.readouterr().out
    assert not output_dir.exists()


def test_list_json_reports_winning_sources(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["resources", "list", "--base-dir", str(project), "-t", "default", "-t", "site", "--json"]) == 0

    entries = json.loads(capsys.readouterr().out)
    by_name = {e["name"]: e["source"] for e in entries}
    assert by_name["layout.html"] == str((project / "default" / "layout.html").resolve())
    assert "index.html" in by_name
    assert [e["name"] for e in entries].count("layout.html") == 1


def test_list_with_filter_and_source(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["resources", "list", "--base-dir", str(project), "-t", "site", "--filter", r"\.css$", "--source"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines == [f"styles/site.css\t{(project / 'site' / 'styles' / 'site.css').resolve()}"]


def test_dirs_lists_resolved_directories(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["resources", "dirs", "--base-dir", str(project), "-t", "default", "-t", "site", "--json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["templates"] == ["default", "site"]
    assert payload["directories"] == [
        str(get_data_path("templates", "default").resolve()),
        str((project / "default").resolve()),
        str((project / "site").resolve()),
    ]


def test_dirs_reports_when_nothing_resolves(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["resources", "dirs", "--base-dir", str(project), "-t", "ghost"]) == 0

    assert "No directories found for [ghost]." in capsys.readouterr().out


def test_config_show_key_as_json(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["config", "show", "resources.templates", "--base-dir", str(project), "--json"]) == 0

    assert json.loads(capsys.readouterr().out) == {"resources.templates": ["default"]}


def test_config_show_null_value_is_found(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["config", "show", "resources.output_dir", "--base-dir", str(project), "--format", "yaml"]) == 0

    assert yaml.safe_load(capsys.readouterr().out) == {"resources": {"output_dir": None}}


def test_config_show_missing_key(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["config", "show", "resources.nope", "--base-dir", str(project)]) == 1

    assert "Key not found: resources.nope" in capsys.readouterr().out


def test_config_show_table(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["config", "show", "--base-dir", str(project)]) == 0

    out = capsys.readouterr().out
    assert "[resources]" in out
    assert "templates: [default]" in out
    assert "[logging]" in out


def test_invalid_config_is_reported(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_project_config(project, {"resources": {"overwrite": "sometimes"}})

    assert main(["config", "show", "--base-dir", str(project)]) == 1

    assert "resources.overwrite" in capsys.readouterr().err
