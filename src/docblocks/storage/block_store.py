"""
Content-addressed block store for docblocks.

Stores each distinct block exactly once, under its hex SHA-256 digest.
"""

import logging
import os
import uuid
from pathlib import Path
from typing import List

from docblocks.core.errors import CorruptRead, NotFound, StorageIO
from docblocks.core.ids import compute_block_key, is_valid_block_key

logger = logging.getLogger(__name__)


class BlockStore:
    """
    Flat directory of immutable blocks.

    Format:
    - <block_dir>/<sha256 hex>: raw block bytes, nothing else
    - <block_dir>/<sha256 hex>.<uuid>.tmp: in-flight write, never read

    Writes go to a unique temp file that is renamed onto the final locator,
    so a reader sees either no block or the whole block. Two writers racing
    on the same key both rename identical bytes; the loser's rename is a
    harmless overwrite.
    """

    TMP_SUFFIX = ".tmp"

    def __init__(self, block_dir: Path, verify: bool = True, fsync: bool = True):
        """
        Initialize block store.

        Args:
            block_dir: Directory holding one file per block
            verify: Re-hash blocks on read and reject mismatches
            fsync: fsync each block before it becomes visible
        """
        self.block_dir = Path(block_dir)
        self.verify = verify
        self.fsync = fsync
        self.block_dir.mkdir(parents=True, exist_ok=True)

    def _block_path(self, key: str) -> Path:
        return self.block_dir / key

    def put(self, data: bytes) -> str:
        """
        Store a block if no block with the same content key exists.

        Args:
            data: Block bytes

        Returns:
            Content key of the block (whether or not a write happened)
        """
        key = compute_block_key(data)
        block_path = self._block_path(key)

        if block_path.exists():
            logger.debug("Block %s already stored (deduplicated)", key[:12])
            return key

        tmp_path = self.block_dir / f"{key}.{uuid.uuid4().hex}{self.TMP_SUFFIX}"
        try:
            with open(tmp_path, "wb") as f:
                f.write(data)
                if self.fsync:
                    f.flush()
                    os.fsync(f.fileno())
            os.replace(tmp_path, block_path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise StorageIO(f"Failed to write block {key}: {e}") from e

        logger.debug("Stored block %s (%d bytes)", key[:12], len(data))
        return key

    def get(self, key: str) -> bytes:
        """
        Read a block back.

        Args:
            key: Content key

        Returns:
            Exact bytes stored under key

        Raises:
            NotFound: No block with that key (malformed keys included)
            CorruptRead: Block unreadable or its content no longer matches key
        """
        if not is_valid_block_key(key):
            raise NotFound(f"No block with key {key!r}")

        try:
            with open(self._block_path(key), "rb") as f:
                data = f.read()
        except FileNotFoundError as e:
            raise NotFound(f"No block with key {key}") from e
        except OSError as e:
            raise CorruptRead(f"Failed to read block {key}: {e}") from e

        if self.verify and compute_block_key(data) != key:
            raise CorruptRead(f"Checksum mismatch for block {key} ({len(data)} bytes read)")

        return data

    def exists(self, key: str) -> bool:
        """Check if a block is stored."""
        return is_valid_block_key(key) and self._block_path(key).exists()

    def __contains__(self, key: str) -> bool:
        return self.exists(key)

    def keys(self) -> List[str]:
        """Sorted keys of all stored blocks (in-flight temp files excluded)."""
        return sorted(
            entry.name
            for entry in self.block_dir.iterdir()
            if entry.is_file() and is_valid_block_key(entry.name)
        )

    def __len__(self) -> int:
        return len(self.keys())

    def total_bytes(self) -> int:
        """Total size of all stored blocks."""
        return sum(self._block_path(key).stat().st_size for key in self.keys())
