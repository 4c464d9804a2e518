"""
Tests for content keys and filename validation.
"""

import hashlib

import pytest

from docblocks.core.errors import BadInput
from docblocks.core.ids import compute_block_key, is_valid_block_key, validate_filename


def test_compute_block_key():
    """Block key is the lowercase hex SHA-256 of the bytes."""
    data = b"Hello world"

    key1 = compute_block_key(data)
    key2 = compute_block_key(data)

    # Should be deterministic
    assert key1 == key2
    assert key1 == hashlib.sha256(data).hexdigest()
    assert len(key1) == 64
    assert key1 == key1.lower()


def test_different_content_different_key():
    assert compute_block_key(b"alpha") != compute_block_key(b"beta")


def test_is_valid_block_key():
    assert is_valid_block_key(compute_block_key(b"x"))
    assert not is_valid_block_key("")
    assert not is_valid_block_key("A" * 64)  # uppercase
    assert not is_valid_block_key("a" * 63)
    assert not is_valid_block_key("../" + "a" * 61)
    assert not is_valid_block_key(None)


def test_validate_filename_accepts_plain_names():
    for name in ["report.pdf", "notes", "my file (1).txt", ".hidden", "résumé.docx"]:
        assert validate_filename(name) == name


@pytest.mark.parametrize(
    "name",
    ["", ".", "..", "../etc/passwd", "a/b.txt", "a\\b.txt", "nul\x00byte", "line\nbreak", "x" * 256],
)
def test_validate_filename_rejects_unsafe_names(name):
    with pytest.raises(BadInput):
        validate_filename(name)
