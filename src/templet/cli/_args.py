"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_base_dir_flag(parser: argparse.ArgumentParser) -> None:
    """Add --base-dir flag (where user bundles and .templet/config live)."""
    parser.add_argument(
        "--base-dir",
        type=str,
        help="Base directory for user bundles and .templet/config (default: current directory)",
    )


def add_output_dir_flag(parser: argparse.ArgumentParser, required: bool = False) -> None:
    """Add --output/-o flag for the export destination."""
    parser.add_argument(
        "--output",
        "-o",
        dest="output_dir",
        required=required,
        help="Output directory (default: resources.output_dir from config)",
    )


def add_filter_flag(parser: argparse.ArgumentParser) -> None:
    """Add --filter flag (regular expression matched against resource paths)."""
    parser.add_argument(
        "--filter",
        dest="filter",
        help=r"Regular expression matched against relative resource paths (e.g. '\.css$')",
    )


def add_template_arg(parser: argparse.ArgumentParser) -> None:
    """Add repeatable --template/-t argument overriding resources.templates."""
    parser.add_argument(
        "--template",
        "-t",
        dest="templates",
        action="append",
        metavar="NAME",
        help="Template bundle name (repeatable, order matters)",
    )


def add_theme_arg(parser: argparse.ArgumentParser) -> None:
    """Add repeatable --theme argument overriding resources.themes."""
    parser.add_argument(
        "--theme",
        dest="themes",
        action="append",
        metavar="NAME",
        help="Theme bundle name (repeatable, order matters)",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add standard flags that most commands use: --json, --base-dir."""
    add_json_flag(parser)
    add_base_dir_flag(parser)


__all__ = [
    "add_json_flag",
    "add_base_dir_flag",
    "add_output_dir_flag",
    "add_filter_flag",
    "add_template_arg",
    "add_theme_arg",
    "add_standard_flags",
]
