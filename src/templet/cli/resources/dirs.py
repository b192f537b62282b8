"""
Templet resources dirs command.

SUMMARY: List the directories the template bundles resolve to
"""

from __future__ import annotations

import argparse
import sys

from templet.cli import OutputFormatter, add_standard_flags, add_template_arg, build_resource_manager

SUMMARY = "List the directories the template bundles resolve to"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_template_arg(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        manager = build_resource_manager(args)
        directories = [str(d) for d in manager.get_template_directories()]

        if formatter.json_mode:
            formatter.json_output({"templates": list(manager.templates), "directories": directories})
        elif not directories:
            formatter.text(f"No directories found for [{', '.join(manager.templates)}].")
        else:
            for d in directories:
                formatter.text(d)
        return 0

    except Exception as e:
        formatter.error(e, error_code="resources_dirs_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
