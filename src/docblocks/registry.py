"""
Registry: the process-wide owner of the block store, manifest store and
keyword index, and the entry point for ingest, retrieval and search.

Construct one Registry at startup and pass it to whatever serves requests.
It holds no global state, so several registries (e.g. one per test) can
coexist in one process.
"""

import io
import logging
from dataclasses import replace
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

from docblocks.core.contracts import Config, RebuildStats, SearchResult, StoreStats
from docblocks.core.errors import BadInput, CorruptRead, MissingBlock
from docblocks.core.ids import validate_filename
from docblocks.ingestion.chunker import FixedSizeChunker
from docblocks.ingestion.pipeline import IngestPipeline
from docblocks.search.keyword_index import KeywordIndex
from docblocks.search.retrieval import RetrievalPipeline
from docblocks.search.tokenizer import KeywordTokenizer
from docblocks.storage.block_store import BlockStore
from docblocks.storage.manifest import ManifestStore

logger = logging.getLogger(__name__)


class Registry:
    """Facade over the storage, ingestion and search layers."""

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize registry, creating the on-disk layout if needed.

        Args:
            config: Configuration (defaults to Config())
        """
        self.config = config or Config()

        self.block_store = BlockStore(
            self.config.block_dir,
            verify=self.config.verify_blocks,
            fsync=self.config.fsync_writes,
        )
        self.manifest_store = ManifestStore(
            self.config.manifest_dir,
            suffix=self.config.manifest_suffix,
            fsync=self.config.fsync_writes,
        )
        self.tokenizer = KeywordTokenizer(min_length=self.config.min_keyword_length)
        self.keyword_index = KeywordIndex(self.tokenizer)
        self.chunker = FixedSizeChunker(self.config)

        self.ingest_pipeline = IngestPipeline(
            self.chunker, self.block_store, self.keyword_index, self.manifest_store
        )
        self.retrieval_pipeline = RetrievalPipeline(self.manifest_store, self.block_store)

    def ingest(self, filename: str, content: Union[BinaryIO, bytes, None]) -> int:
        """
        Store content under filename and index its keywords.

        Args:
            filename: Uploaded filename
            content: Binary stream or bytes (an empty payload is a valid,
                zero-block file)

        Returns:
            Number of blocks

        Raises:
            BadInput: No content, or an unsafe filename
        """
        validate_filename(filename)
        if content is None:
            raise BadInput("No file uploaded")
        if isinstance(content, (bytes, bytearray, memoryview)):
            content = io.BytesIO(bytes(content))

        return self.ingest_pipeline.ingest(filename, content)

    def retrieve(self, filename: str) -> Iterator[bytes]:
        """Stream the blocks of filename (NotFound raised immediately)."""
        validate_filename(filename)
        return self.retrieval_pipeline.retrieve(filename)

    def download(self, filename: str, sink: BinaryIO) -> int:
        """Reconstruct filename into sink; returns bytes written."""
        validate_filename(filename)
        return self.retrieval_pipeline.write_to(filename, sink)

    def read_file(self, filename: str) -> bytes:
        """Reconstruct filename in memory."""
        validate_filename(filename)
        return self.retrieval_pipeline.read_bytes(filename)

    def search_keyword(self, keyword: str) -> SearchResult:
        """
        Exact-keyword lookup.

        Args:
            keyword: Keyword in any case

        Returns:
            SearchResult with sorted filenames and their count
        """
        query = self.tokenizer.normalize_query(keyword or "")
        if not query:
            raise BadInput("Query keyword is required")

        found_in = sorted(self.keyword_index.lookup(query))
        return SearchResult(keyword=query, found_in=found_in, count=len(found_in))

    def rebuild_index(self) -> RebuildStats:
        """
        Index the current content of every stored file.

        Adds to the live index (nothing is removed). Used by short-lived
        processes such as the CLI, where the index from earlier uploads is
        gone. A file with a missing or corrupt block is skipped as a whole
        and reported; the remaining files are still indexed.

        Returns:
            RebuildStats with the indexed count and the skipped filenames
        """
        indexed = 0
        skipped = []
        for filename in self.manifest_store.list_filenames():
            tokens = set()
            try:
                for block in self.retrieval_pipeline.retrieve(filename):
                    tokens |= self.tokenizer.tokenize_block(block)
            except (MissingBlock, CorruptRead) as e:
                logger.warning("Skipping %r while rebuilding keyword index: %s", filename, e)
                skipped.append(filename)
                continue

            self.keyword_index.add_keywords(filename, tokens)
            indexed += 1

        logger.info("Rebuilt keyword index from %d files (%d skipped)", indexed, len(skipped))
        return RebuildStats(indexed_files=indexed, skipped_files=skipped)

    def stats(self) -> StoreStats:
        """Snapshot of stored blocks, files and keywords."""
        return StoreStats(
            total_blocks=len(self.block_store),
            total_bytes=self.block_store.total_bytes(),
            total_files=len(self.manifest_store.list_filenames()),
            total_keywords=len(self.keyword_index),
        )


def open_registry(data_dir: Union[str, Path], config: Optional[Config] = None) -> Registry:
    """
    Open (or create) a registry rooted at data_dir.

    Args:
        data_dir: Root directory for blocks/ and manifests/
        config: Optional configuration; its data_dir is overridden

    Returns:
        Registry instance
    """
    return Registry(replace(config or Config(), data_dir=str(data_dir)))
