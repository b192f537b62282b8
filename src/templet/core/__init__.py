"""Core library for Templet (resources, config, logging)."""
