"""
Templet CLI package.

Provides the command-line interface with auto-discovery of commands
from subfolders (resources/, config/).

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._args import (
    add_base_dir_flag,
    add_filter_flag,
    add_json_flag,
    add_output_dir_flag,
    add_standard_flags,
    add_template_arg,
    add_theme_arg,
)
from ._output import OutputFormatter
from ._utils import build_resource_manager, get_base_dir, get_output_dir, get_resources_config

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_base_dir_flag",
    "add_output_dir_flag",
    "add_filter_flag",
    "add_template_arg",
    "add_theme_arg",
    "add_standard_flags",
    # Utilities
    "get_base_dir",
    "get_resources_config",
    "build_resource_manager",
    "get_output_dir",
]
