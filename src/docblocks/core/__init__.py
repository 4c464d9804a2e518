"""
Core contracts, errors and key generation for docblocks.
"""

from docblocks.core.contracts import Config, RebuildStats, SearchResult, StoreStats
from docblocks.core.errors import (
    BadInput,
    CorruptRead,
    DocBlocksError,
    MissingBlock,
    NotFound,
    StorageIO,
)
from docblocks.core.ids import compute_block_key, is_valid_block_key, validate_filename
from docblocks.core.locks import ReadWriteLock

__all__ = [
    "Config",
    "RebuildStats",
    "SearchResult",
    "StoreStats",
    "DocBlocksError",
    "BadInput",
    "NotFound",
    "MissingBlock",
    "StorageIO",
    "CorruptRead",
    "compute_block_key",
    "is_valid_block_key",
    "validate_filename",
    "ReadWriteLock",
]
