"""Test the read-write lock used by the keyword index."""

import threading
import time

from docblocks.core.locks import ReadWriteLock


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    inside = []
    barrier = threading.Barrier(3, timeout=5)

    def reader():
        with lock.read_locked():
            inside.append(1)
            # All three readers must be inside at once to pass the barrier
            barrier.wait()

    threads = [threading.Thread(target=reader) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert len(inside) == 3


def test_writer_excludes_readers():
    lock = ReadWriteLock()
    events = []

    lock.acquire_write()

    def reader():
        with lock.read_locked():
            events.append("read")

    t = threading.Thread(target=reader)
    t.start()
    time.sleep(0.05)
    events.append("write-done")
    lock.release_write()
    t.join(timeout=5)

    assert events == ["write-done", "read"]
