"""Test helper modules for the Templet test suite.

- trees: build and snapshot small directory trees
"""
from __future__ import annotations

from helpers.trees import read_tree, write_tree

__all__ = ["read_tree", "write_tree"]
