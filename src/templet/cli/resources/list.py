"""
Templet resources list command.

SUMMARY: List resource names in the merged template namespace
"""

from __future__ import annotations

import argparse
import sys

from templet.cli import (
    OutputFormatter,
    add_filter_flag,
    add_standard_flags,
    add_template_arg,
    build_resource_manager,
    get_resources_config,
)

SUMMARY = "List resource names in the merged template namespace"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_template_arg(parser)
    add_filter_flag(parser)
    parser.add_argument(
        "--source",
        action="store_true",
        help="Show the file each resource is taken from",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        config = get_resources_config(args)
        manager = build_resource_manager(args, config)
        pattern = args.filter or config.filter

        with manager.create_template_resource() as resources:
            if formatter.json_mode:
                formatter.json_output(
                    [{"name": n, "source": str(resources.resolve(n))} for n in resources.names(pattern)]
                )
                return 0
            for name in resources.names(pattern):
                if args.source:
                    formatter.text(f"{name}\t{resources.resolve(name)}")
                else:
                    formatter.text(name)
        return 0

    except Exception as e:
        formatter.error(e, error_code="resources_list_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
