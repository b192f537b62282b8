"""
Templet resources export command.

SUMMARY: Export template bundles into an output directory

Template files always overwrite existing files in the output directory.
Use --filter to restrict the export to matching relative paths.
"""

from __future__ import annotations

import argparse
import sys

from templet.cli import (
    OutputFormatter,
    add_filter_flag,
    add_output_dir_flag,
    add_standard_flags,
    add_template_arg,
    build_resource_manager,
    get_output_dir,
    get_resources_config,
)

SUMMARY = "Export template bundles into an output directory"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_template_arg(parser)
    add_output_dir_flag(parser)
    add_filter_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        config = get_resources_config(args)
        manager = build_resource_manager(args, config)
        output_dir = get_output_dir(args, config)
        pattern = args.filter or config.filter

        exported = manager.export_templates(output_dir, pattern=pattern)

        formatter.success(
            {
                "exported": exported,
                "templates": list(manager.templates),
                "output_dir": str(output_dir),
            },
            f"Exported [{', '.join(manager.templates)}] to {output_dir}"
            if exported
            else f"Nothing exported for [{', '.join(manager.templates)}]",
        )
        return 0

    except Exception as e:
        formatter.error(e, error_code="resources_export_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
