"""
Ingest pipeline: stream -> blocks -> block store + keyword index -> manifest.
"""

import logging
from typing import BinaryIO, List

from docblocks.ingestion.chunker import FixedSizeChunker
from docblocks.search.keyword_index import KeywordIndex
from docblocks.storage.block_store import BlockStore
from docblocks.storage.manifest import ManifestStore

logger = logging.getLogger(__name__)


class IngestPipeline:
    """
    End-to-end ingest for one upload.

    The manifest is saved only after the whole stream has been stored, so a
    failed or cancelled ingest leaves no manifest behind. Blocks written
    before the failure stay in the store; they are content-addressed and may
    be shared with other files.
    """

    def __init__(
        self,
        chunker: FixedSizeChunker,
        block_store: BlockStore,
        keyword_index: KeywordIndex,
        manifest_store: ManifestStore,
    ):
        self.chunker = chunker
        self.block_store = block_store
        self.keyword_index = keyword_index
        self.manifest_store = manifest_store

    def ingest(self, filename: str, stream: BinaryIO) -> int:
        """
        Ingest stream under filename.

        Args:
            filename: Validated filename
            stream: Upload content

        Returns:
            Number of blocks in the new manifest
        """
        block_keys: List[str] = []
        total_bytes = 0

        for block in self.chunker.chunk_stream(stream):
            key = self.block_store.put(block)
            self.keyword_index.index(filename, block)
            block_keys.append(key)
            total_bytes += len(block)

        self.manifest_store.save(filename, block_keys)

        logger.info(
            "Ingested %r: %d blocks, %d bytes", filename, len(block_keys), total_bytes
        )
        return len(block_keys)
