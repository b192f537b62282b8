"""
Templet config show command.

SUMMARY: Show current configuration

Displays the merged configuration from bundled defaults, user and project
overrides, and TEMPLET_* environment variables. Supports filtering by key and
multiple output formats.
"""

from __future__ import annotations

import argparse
import sys

import yaml

from templet.cli import OutputFormatter, add_standard_flags, get_base_dir
from templet.core.config import ConfigManager

SUMMARY = "Show current configuration"

_MISSING = object()


def _nest_key(key: str, value):
    """Nest a dot-notation key into a YAML/JSON-friendly mapping."""
    parts = [p for p in str(key).split(".") if p]
    out = value
    for part in reversed(parts):
        out = {part: out}
    return out


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "key",
        nargs="?",
        help="Specific configuration key to show (e.g., 'resources.templates')",
    )
    parser.add_argument(
        "--format",
        choices=["json", "yaml", "table"],
        default="table",
        help="Output format (default: table)",
    )
    add_standard_flags(parser)


def _format_value(value, indent: int = 0) -> str:
    """Format a value for table display."""
    prefix = "  " * indent
    if isinstance(value, dict):
        lines = []
        for k, v in value.items():
            formatted = _format_value(v, indent + 1)
            if "\n" in formatted:
                lines.append(f"{prefix}{k}:")
                lines.append(formatted)
            else:
                lines.append(f"{prefix}{k}: {formatted}")
        return "\n".join(lines)
    if isinstance(value, list):
        if not value:
            return "[]"
        return f"[{', '.join(str(v) for v in value)}]"
    return str(value)


def main(args: argparse.Namespace) -> int:
    """Show configuration - delegates to ConfigManager."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        config_manager = ConfigManager(get_base_dir(args))
        config_manager.load_config(validate=True)
        output_format = "json" if args.json else args.format

        if args.key:
            value = config_manager.get(args.key, _MISSING)
            if value is _MISSING:
                formatter.text(f"Key not found: {args.key}")
                return 1
            data = {args.key: value}
        else:
            data = config_manager.get_all()

        if output_format == "json":
            formatter.json_output(data)
        elif output_format == "yaml":
            payload = _nest_key(args.key, value) if args.key else data
            formatter.text(
                yaml.safe_dump(payload, default_flow_style=False, sort_keys=True, allow_unicode=True).rstrip()
            )
        else:
            for section, section_value in data.items():
                formatter.text(f"[{section}]")
                if isinstance(section_value, dict):
                    formatter.text(_format_value(section_value, indent=1))
                else:
                    formatter.text(f"  {_format_value(section_value)}")
                formatter.text("")
        return 0

    except Exception as e:
        formatter.error(e, error_code="config_show_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
