"""
Manifest management: the ordered block keys that reconstruct a named file.
"""

import logging
import os
import threading
import uuid
from pathlib import Path
from typing import List

from docblocks.core.errors import NotFound, StorageIO
from docblocks.core.ids import validate_filename

logger = logging.getLogger(__name__)


class ManifestStore:
    """
    Manifests stored as plain text, one hex key per line, in block order.

    Format:
    - <manifest_dir>/<filename><suffix>: "key\\n" per block; empty file for
      an empty upload
    - <manifest_dir>/.tmp/: in-flight writes, renamed into place when done

    Saves replace the previous manifest atomically (temp file + rename).
    A fixed pool of striped locks serializes save/load for the same name;
    different names contend only when they hash to the same stripe.
    """

    LOCK_STRIPES = 64

    def __init__(self, manifest_dir: Path, suffix: str = ".txt", fsync: bool = True):
        """
        Initialize manifest store.

        Args:
            manifest_dir: Directory containing manifest files
            suffix: Appended to the filename to form the locator
            fsync: fsync each manifest before it replaces the old one
        """
        self.manifest_dir = Path(manifest_dir)
        self.suffix = suffix
        self.fsync = fsync
        self.tmp_dir = self.manifest_dir / ".tmp"
        self.tmp_dir.mkdir(parents=True, exist_ok=True)

        self._locks = [threading.Lock() for _ in range(self.LOCK_STRIPES)]

    def _lock_for(self, filename: str) -> threading.Lock:
        return self._locks[hash(filename) % len(self._locks)]

    def path_for(self, filename: str) -> Path:
        """Manifest locator for filename (validated first)."""
        validate_filename(filename)
        return self.manifest_dir / f"{filename}{self.suffix}"

    def save(self, filename: str, ordered_keys: List[str]):
        """
        Record ordered_keys as the current manifest for filename.

        Args:
            filename: Uploaded filename
            ordered_keys: Block keys in stream order
        """
        manifest_path = self.path_for(filename)
        payload = "".join(f"{key}\n" for key in ordered_keys).encode("ascii")

        with self._lock_for(filename):
            tmp_path = self.tmp_dir / f"{uuid.uuid4().hex}.tmp"
            try:
                with open(tmp_path, "wb") as f:
                    f.write(payload)
                    if self.fsync:
                        f.flush()
                        os.fsync(f.fileno())
                os.replace(tmp_path, manifest_path)
            except OSError as e:
                tmp_path.unlink(missing_ok=True)
                raise StorageIO(f"Failed to save manifest for {filename!r}: {e}") from e

        logger.debug("Saved manifest for %r (%d blocks)", filename, len(ordered_keys))

    def load(self, filename: str) -> List[str]:
        """
        Load the ordered block keys for filename.

        Raises:
            NotFound: filename has no manifest
        """
        manifest_path = self.path_for(filename)

        with self._lock_for(filename):
            try:
                data = manifest_path.read_text(encoding="ascii")
            except FileNotFoundError as e:
                raise NotFound(f"File not found: {filename!r}") from e
            except (OSError, UnicodeDecodeError) as e:
                raise StorageIO(f"Failed to load manifest for {filename!r}: {e}") from e

        return [line for line in data.strip().split("\n") if line]

    def exists(self, filename: str) -> bool:
        """Check if filename has a manifest."""
        return self.path_for(filename).exists()

    def list_filenames(self) -> List[str]:
        """Sorted filenames that currently have a manifest."""
        names = []
        for entry in self.manifest_dir.iterdir():
            name = entry.name
            if entry.is_file() and name.endswith(self.suffix):
                names.append(name[: len(name) - len(self.suffix)] if self.suffix else name)
        return sorted(names)
