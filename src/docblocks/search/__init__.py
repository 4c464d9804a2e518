"""
Search layer: keyword tokenizer, inverted index, and file retrieval.
"""

from docblocks.search.keyword_index import KeywordIndex
from docblocks.search.retrieval import RetrievalPipeline
from docblocks.search.tokenizer import KeywordTokenizer

__all__ = [
    "KeywordTokenizer",
    "KeywordIndex",
    "RetrievalPipeline",
]
