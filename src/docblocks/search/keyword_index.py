"""
In-memory inverted index: keyword -> set of filenames.

Entries only ever accumulate. Re-uploading a file under the same name adds
the new content's keywords but never removes the old ones, so a keyword can
keep pointing at a filename whose current content no longer contains it.
"""

import logging
from collections import defaultdict
from typing import Dict, FrozenSet, List, Set

from docblocks.core.locks import ReadWriteLock
from docblocks.search.tokenizer import KeywordTokenizer

logger = logging.getLogger(__name__)


class KeywordIndex:
    """Inverted index guarded by a single whole-index read-write lock."""

    def __init__(self, tokenizer: KeywordTokenizer):
        self.tokenizer = tokenizer
        self._index: Dict[str, Set[str]] = defaultdict(set)
        self._lock = ReadWriteLock()

    def index(self, filename: str, block: bytes) -> int:
        """
        Record filename under every keyword found in block.

        Args:
            filename: File the block belongs to
            block: Raw block bytes

        Returns:
            Number of distinct keywords in the block
        """
        return self.add_keywords(filename, self.tokenizer.tokenize_block(block))

    def add_keywords(self, filename: str, tokens: Set[str]) -> int:
        """Record filename under already tokenized keywords."""
        if not tokens:
            return 0

        with self._lock.write_locked():
            for token in tokens:
                self._index[token].add(filename)

        logger.debug("Indexed %d keywords for %r", len(tokens), filename)
        return len(tokens)

    def lookup(self, keyword: str) -> FrozenSet[str]:
        """
        Filenames whose content contained keyword.

        Args:
            keyword: Query keyword (casefolded here)

        Returns:
            Frozen copy of the filename set; empty if the keyword is unseen
        """
        query = self.tokenizer.normalize_query(keyword)
        with self._lock.read_locked():
            filenames = self._index.get(query)
            return frozenset(filenames) if filenames else frozenset()

    def keywords(self) -> List[str]:
        """Sorted list of indexed keywords."""
        with self._lock.read_locked():
            return sorted(self._index)

    def __contains__(self, keyword: str) -> bool:
        return bool(self.lookup(keyword))

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._index)
