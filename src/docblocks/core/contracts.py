"""
Core data structures (dataclasses) for docblocks.

All core data structures are defined as explicit dataclasses.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

DEFAULT_MAX_BLOCK_SIZE = 1 * 1024 * 1024  # 1 MiB


@dataclass
class Config:
    """Configuration for block storage, manifests and keyword indexing."""

    # Layout
    data_dir: str = "./data"
    block_dir_name: str = "blocks"
    manifest_dir_name: str = "manifests"
    manifest_suffix: str = ".txt"

    # Chunking
    max_block_size: int = DEFAULT_MAX_BLOCK_SIZE

    # Keyword index
    min_keyword_length: int = 3

    # Durability / integrity
    verify_blocks: bool = True  # re-hash blocks on read
    fsync_writes: bool = True

    @property
    def block_dir(self) -> Path:
        return Path(self.data_dir) / self.block_dir_name

    @property
    def manifest_dir(self) -> Path:
        return Path(self.data_dir) / self.manifest_dir_name


@dataclass
class SearchResult:
    """Result of an exact-keyword lookup."""

    keyword: str  # casefolded query
    found_in: List[str] = field(default_factory=list)  # sorted filenames
    count: int = 0


@dataclass
class StoreStats:
    """Snapshot of what a registry currently holds."""

    total_blocks: int
    total_bytes: int
    total_files: int
    total_keywords: int


@dataclass
class RebuildStats:
    """Outcome of re-indexing the stored files."""

    indexed_files: int
    skipped_files: List[str] = field(default_factory=list)  # unreadable, sorted
