"""
Tests for keyword tokenization and the inverted index.
"""

from docblocks.search.keyword_index import KeywordIndex
from docblocks.search.tokenizer import KeywordTokenizer


def test_tokenize_casefolds_and_splits_on_non_alphanumerics():
    tokenizer = KeywordTokenizer()

    tokens = tokenizer.tokenize('Signed "Contract", v2; due_date:2024-01-01\tOK')

    assert tokens == ["signed", "contract", "due", "date", "2024"]


def test_short_tokens_dropped():
    tokenizer = KeywordTokenizer(min_length=3)
    assert tokenizer.tokenize("a an the to of it") == ["the"]


def test_invalid_utf8_acts_as_separator():
    tokenizer = KeywordTokenizer()
    assert tokenizer.tokenize_block(b"alpha\xffbeta") == {"alpha", "beta"}


def test_lookup_is_case_insensitive():
    index = KeywordIndex(KeywordTokenizer())
    index.index("deal.txt", b"This Contract is binding.")

    assert index.lookup("contract") == {"deal.txt"}
    assert index.lookup("CONTRACT") == {"deal.txt"}
    assert index.lookup("  Contract ") == {"deal.txt"}


def test_filename_recorded_once_per_keyword():
    """Set semantics: repeated keywords across blocks never duplicate a filename."""
    index = KeywordIndex(KeywordTokenizer())
    index.index("a.txt", b"invoice invoice invoice")
    index.index("a.txt", b"another invoice")
    index.index("b.txt", b"invoice")

    assert index.lookup("invoice") == {"a.txt", "b.txt"}


def test_unseen_and_short_keywords_return_empty_set():
    index = KeywordIndex(KeywordTokenizer())
    index.index("a.txt", b"to be or not")

    assert index.lookup("missing") == frozenset()
    assert index.lookup("to") == frozenset()
    assert "not" in index
    assert "be" not in index


def test_index_returns_distinct_keyword_count():
    index = KeywordIndex(KeywordTokenizer())
    assert index.index("a.txt", b"red red green blue") == 3
    assert index.index("a.txt", b"\x00\x01") == 0
    assert index.keywords() == ["blue", "green", "red"]
    assert len(index) == 3


def test_entries_are_never_removed():
    """Re-indexing different content adds keywords but keeps the old ones."""
    index = KeywordIndex(KeywordTokenizer())
    index.index("doc.txt", b"version one draft")
    index.index("doc.txt", b"final text")

    assert index.lookup("draft") == {"doc.txt"}
    assert index.lookup("final") == {"doc.txt"}
