"""
Keyword tokenizer for docblocks.

Tokenization is block-local: a word cut in half by a block boundary becomes
two fragments, and neither fragment is the original word.
"""

import re
from typing import List, Set

# Runs of letters/digits; "_" and all punctuation/whitespace separate tokens.
_TOKEN_RE = re.compile(r"[^\W_]+")


class KeywordTokenizer:
    """
    Word-based tokenizer for exact-keyword lookup.

    Casefolds, splits on any non-alphanumeric character, and drops tokens
    shorter than min_length characters.
    """

    def __init__(self, min_length: int = 3):
        """
        Initialize tokenizer.

        Args:
            min_length: Shortest token (in characters) that is kept
        """
        self.min_length = min_length

    def tokenize(self, text: str) -> List[str]:
        """
        Tokenize text.

        Args:
            text: Text to tokenize

        Returns:
            List of tokens, in order, duplicates included
        """
        return [t for t in _TOKEN_RE.findall(text.casefold()) if len(t) >= self.min_length]

    def tokenize_block(self, data: bytes) -> Set[str]:
        """
        Distinct tokens of a raw block.

        Invalid UTF-8 (binary content, or a multi-byte character cut at the
        block edge) decodes to U+FFFD, which acts as a separator.
        """
        return set(self.tokenize(data.decode("utf-8", errors="replace")))

    def normalize_query(self, keyword: str) -> str:
        """Casefold a lookup keyword the same way indexed tokens are."""
        return keyword.strip().casefold()
