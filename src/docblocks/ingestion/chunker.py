"""
Chunking strategies for docblocks.

Fixed-size chunking only: block boundaries are byte offsets, not content-aware.
"""

import io
from typing import BinaryIO, Iterator

from docblocks.core.contracts import Config
from docblocks.core.errors import StorageIO


class FixedSizeChunker:
    """Split a byte stream into blocks of exactly max_block_size bytes (last one may be shorter)."""

    def __init__(self, config: Config):
        """
        Initialize chunker with configuration.

        Args:
            config: Configuration object with max_block_size
        """
        if config.max_block_size <= 0:
            raise ValueError(f"max_block_size must be positive, got {config.max_block_size}")

        self.config = config
        self.block_size = config.max_block_size

    def chunk_stream(self, stream: BinaryIO) -> Iterator[bytes]:
        """
        Lazily yield blocks from stream, in stream order.

        Short reads are accumulated so every block but the last is full.
        An empty stream yields nothing.

        Args:
            stream: Readable binary stream (consumed once)

        Yields:
            Block bytes, 1..block_size long

        Raises:
            StorageIO: The stream failed before a clean end-of-stream; the
                partially filled block is dropped
        """
        while True:
            block = self._read_block(stream)
            if not block:
                return
            yield block
            if len(block) < self.block_size:
                return

    def chunk_bytes(self, data: bytes) -> Iterator[bytes]:
        """Chunk an in-memory payload."""
        return self.chunk_stream(io.BytesIO(data))

    def _read_block(self, stream: BinaryIO) -> bytes:
        """Read up to block_size bytes, looping over short reads until EOF."""
        parts = []
        remaining = self.block_size
        while remaining > 0:
            try:
                part = stream.read(remaining)
            except OSError as e:
                raise StorageIO(f"Failed to read upload stream: {e}") from e
            if not part:
                break
            parts.append(part)
            remaining -= len(part)
        return b"".join(parts)
