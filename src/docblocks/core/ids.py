"""
Content keys and filename validation for docblocks.

Key Policy (Content Addressing):
- block key: lowercase hex of sha256(block_bytes), 64 characters
- the key is used verbatim as the block's storage locator, so only
  well-formed keys are ever turned into paths

Filename Policy:
- filenames come from untrusted upload input and become part of the
  manifest locator, so they are validated before any path is derived
"""

import hashlib
import logging
import re

from docblocks.core.errors import BadInput

logger = logging.getLogger(__name__)

KEY_LENGTH = 64
MAX_FILENAME_BYTES = 255

_KEY_RE = re.compile(r"^[0-9a-f]{64}$")


def compute_block_key(data: bytes) -> str:
    """
    Compute the content key of a block.

    Args:
        data: Block bytes

    Returns:
        64-character lowercase hex SHA-256 digest
    """
    return hashlib.sha256(data).hexdigest()


def is_valid_block_key(key: str) -> bool:
    """Check that key is a lowercase 64-char hex digest."""
    return isinstance(key, str) and _KEY_RE.match(key) is not None


def validate_filename(filename: str) -> str:
    """
    Validate a filename before it is used to derive a storage locator.

    Rejects:
    - empty names and the special names "." and ".."
    - path separators ("/" and "\\")
    - NUL and other control characters
    - names longer than 255 bytes when UTF-8 encoded

    Args:
        filename: Filename as supplied by the uploader

    Returns:
        The filename, unchanged

    Raises:
        BadInput: If the filename is unsafe or empty
    """
    if not isinstance(filename, str) or not filename:
        raise BadInput("Filename is required")

    reason = None
    if filename in (".", ".."):
        reason = "reserved name"
    elif "/" in filename or "\\" in filename:
        reason = "path separator"
    elif any(ord(c) < 32 or ord(c) == 127 for c in filename):
        reason = "control character"
    elif len(filename.encode("utf-8", errors="surrogatepass")) > MAX_FILENAME_BYTES:
        reason = "too long"

    if reason is not None:
        logger.warning("Rejected filename %r: %s", filename, reason)
        raise BadInput(f"Invalid filename {filename!r}: {reason}")

    return filename
