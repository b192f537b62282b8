"""
Templet resources theme command.

SUMMARY: Apply theme bundles to an output directory

Existing files are kept unless --overwrite is given (or resources.overwrite
is true in config).
"""

from __future__ import annotations

import argparse
import sys

from templet.cli import (
    OutputFormatter,
    add_output_dir_flag,
    add_standard_flags,
    add_theme_arg,
    build_resource_manager,
    get_output_dir,
    get_resources_config,
)

SUMMARY = "Apply theme bundles to an output directory"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_theme_arg(parser)
    add_output_dir_flag(parser)
    parser.add_argument(
        "--overwrite",
        action="store_true",
        default=None,
        help="Overwrite files that already exist in the output directory",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        config = get_resources_config(args)
        manager = build_resource_manager(args, config)
        output_dir = get_output_dir(args, config)
        overwrite = config.overwrite if args.overwrite is None else args.overwrite

        manager.apply_themes(output_dir, overwrite)

        themes = list(manager.themes or [])
        formatter.success(
            {"themes": themes, "output_dir": str(output_dir), "overwrite": overwrite},
            f"Theme(s) {', '.join(themes)} applied to {output_dir}" if themes else "No themes configured",
        )
        return 0

    except Exception as e:
        formatter.error(e, error_code="resources_theme_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
