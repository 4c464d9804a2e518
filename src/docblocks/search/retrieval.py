"""
Retrieval pipeline: filename -> manifest -> blocks -> output stream.
"""

import logging
from typing import BinaryIO, Iterator, List

from docblocks.core.errors import MissingBlock, NotFound
from docblocks.storage.block_store import BlockStore
from docblocks.storage.manifest import ManifestStore

logger = logging.getLogger(__name__)


class RetrievalPipeline:
    """
    End-to-end reconstruction: load manifest -> fetch blocks in order -> emit.
    """

    def __init__(self, manifest_store: ManifestStore, block_store: BlockStore):
        """
        Initialize retrieval pipeline.

        Args:
            manifest_store: ManifestStore instance
            block_store: BlockStore instance
        """
        self.manifest_store = manifest_store
        self.block_store = block_store

    def retrieve(self, filename: str) -> Iterator[bytes]:
        """
        Stream the blocks of filename in manifest order.

        The manifest is loaded before this returns, so an unknown filename
        raises NotFound here rather than on first iteration.

        Args:
            filename: Validated filename

        Returns:
            Iterator over block bytes

        Raises:
            NotFound: filename has no manifest
            MissingBlock: (during iteration) a referenced block is absent
        """
        keys = self.manifest_store.load(filename)
        return self._iter_blocks(filename, keys)

    def _iter_blocks(self, filename: str, keys: List[str]) -> Iterator[bytes]:
        for position, key in enumerate(keys):
            try:
                yield self.block_store.get(key)
            except NotFound as e:
                logger.warning(
                    "Manifest for %r references missing block %s at position %d",
                    filename,
                    key,
                    position,
                )
                raise MissingBlock(filename, key, position) from e

    def write_to(self, filename: str, sink: BinaryIO) -> int:
        """
        Reconstruct filename into sink.

        Bytes already written stay written if a later block fails; callers
        must discard the output on error.

        Returns:
            Number of bytes written
        """
        written = 0
        for block in self.retrieve(filename):
            sink.write(block)
            written += len(block)

        logger.info("Retrieved %r: %d bytes", filename, written)
        return written

    def read_bytes(self, filename: str) -> bytes:
        """Reconstruct filename fully in memory."""
        return b"".join(self.retrieve(filename))
