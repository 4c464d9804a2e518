"""
Storage layer: content-addressed block store and manifest management.
"""

from docblocks.storage.block_store import BlockStore
from docblocks.storage.manifest import ManifestStore

__all__ = [
    "BlockStore",
    "ManifestStore",
]
