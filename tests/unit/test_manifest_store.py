"""Test that ManifestStore writes and reads the plain-text manifest format exactly."""

import hashlib
import tempfile
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from docblocks.core.errors import BadInput, NotFound
from docblocks.storage.manifest import ManifestStore


def make_keys(n):
    return [hashlib.sha256(str(i).encode()).hexdigest() for i in range(n)]


def test_manifest_file_format():
    """One hex key per line, newline-terminated, under <filename>.txt."""
    with tempfile.TemporaryDirectory() as temp_dir:
        store = ManifestStore(Path(temp_dir))
        keys = make_keys(3)

        store.save("report.pdf", keys)

        raw = (Path(temp_dir) / "report.pdf.txt").read_bytes()
        assert raw == ("\n".join(keys) + "\n").encode("ascii")
        assert store.load("report.pdf") == keys


def test_empty_manifest_round_trips():
    with tempfile.TemporaryDirectory() as temp_dir:
        store = ManifestStore(Path(temp_dir))

        store.save("empty.txt", [])

        assert (Path(temp_dir) / "empty.txt.txt").read_bytes() == b""
        assert store.load("empty.txt") == []


def test_load_trims_surrounding_whitespace():
    """Manifests written by other tools may lack or double the final newline."""
    with tempfile.TemporaryDirectory() as temp_dir:
        store = ManifestStore(Path(temp_dir))
        keys = make_keys(2)
        (Path(temp_dir) / "a.bin.txt").write_text("\n".join(keys) + "\n\n  ")

        assert store.load("a.bin") == keys


def test_save_replaces_previous_manifest():
    with tempfile.TemporaryDirectory() as temp_dir:
        store = ManifestStore(Path(temp_dir))
        store.save("doc", make_keys(5))
        store.save("doc", make_keys(1))

        assert store.load("doc") == make_keys(1)


def test_load_missing_raises_not_found():
    with tempfile.TemporaryDirectory() as temp_dir:
        store = ManifestStore(Path(temp_dir))

        with pytest.raises(NotFound):
            store.load("nope.txt")
        assert not store.exists("nope.txt")


def test_unsafe_filename_rejected_before_any_path_is_built():
    with tempfile.TemporaryDirectory() as temp_dir:
        store = ManifestStore(Path(temp_dir) / "manifests")

        with pytest.raises(BadInput):
            store.save("../escape", make_keys(1))
        assert not (Path(temp_dir) / "escape.txt").exists()


def test_list_filenames_skips_temp_files():
    with tempfile.TemporaryDirectory() as temp_dir:
        store = ManifestStore(Path(temp_dir))
        store.save("b.txt", make_keys(1))
        store.save("a.txt", [])
        (store.tmp_dir / "leftover.tmp").write_text("partial")

        assert store.list_filenames() == ["a.txt", "b.txt"]


def test_lock_pool_stays_bounded():
    """Lookups of unknown names must not grow per-name state."""
    with tempfile.TemporaryDirectory() as temp_dir:
        store = ManifestStore(Path(temp_dir))

        for i in range(5000):
            with pytest.raises(NotFound):
                store.load(f"nope-{i}.txt")

        assert len(store._locks) == ManifestStore.LOCK_STRIPES


def test_concurrent_save_and_load_see_whole_manifests():
    """A load racing saves of the same name sees the old or the new manifest, never a mix."""
    keys_a = make_keys(200)
    keys_b = make_keys(300)[250:]

    with tempfile.TemporaryDirectory() as temp_dir:
        store = ManifestStore(Path(temp_dir), fsync=False)
        store.save("shared.bin", keys_a)

        def writer(i):
            store.save("shared.bin", keys_a if i % 2 else keys_b)

        def reader(_):
            return store.load("shared.bin")

        with ThreadPoolExecutor(max_workers=8) as pool:
            writes = []
            reads = []
            for i in range(100):
                writes.append(pool.submit(writer, i))
                reads.extend(pool.submit(reader, i) for _ in range(3))
            for future in writes:
                future.result()
            results = [future.result() for future in reads]

        assert all(keys == keys_a or keys == keys_b for keys in results)
        assert store.load("shared.bin") in (keys_a, keys_b)
