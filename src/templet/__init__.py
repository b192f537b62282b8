"""
Templet - layered template and theme resource export

Templet resolves named template and theme bundles across a layered search
path, merges them into a single resource namespace, and exports them into an
output directory for a documentation build.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
