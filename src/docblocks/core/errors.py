"""
Error taxonomy for docblocks.

Client-correctable conditions (BadInput, NotFound) carry client_error=True;
everything else is a server-side fault.
"""


class DocBlocksError(Exception):
    """Base class for all docblocks errors."""

    client_error = False


class BadInput(DocBlocksError):
    """No content supplied, empty or unsafe filename, empty keyword."""

    client_error = True


class NotFound(DocBlocksError):
    """No manifest for a filename, or no block for a key."""

    client_error = True


class MissingBlock(DocBlocksError):
    """A manifest references a block that is absent from the block store."""

    def __init__(self, filename: str, key: str, position: int):
        super().__init__(
            f"Manifest for {filename!r} references missing block {key} at position {position}"
        )
        self.filename = filename
        self.key = key
        self.position = position


class StorageIO(DocBlocksError):
    """Underlying read/write failure."""


class CorruptRead(DocBlocksError):
    """Stored block could not be fully read back or does not match its key."""
