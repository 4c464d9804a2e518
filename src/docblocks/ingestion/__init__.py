"""
Ingestion: fixed-size chunking and the ingest pipeline.
"""

from docblocks.ingestion.chunker import FixedSizeChunker
from docblocks.ingestion.pipeline import IngestPipeline

__all__ = [
    "FixedSizeChunker",
    "IngestPipeline",
]
