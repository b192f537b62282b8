"""Resource commands: dirs, list, export, theme."""
