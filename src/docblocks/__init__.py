"""
docblocks - Content-addressed block storage with keyword search.
"""

from docblocks.core import Config
from docblocks.registry import Registry, open_registry

__version__ = "0.1.0"

__all__ = [
    "open_registry",
    "Registry",
    "Config",
]
