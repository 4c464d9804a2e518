"""
Basic usage example for docblocks.
"""

import io

from docblocks import Config, open_registry

# Open a registry (creates data/blocks and data/manifests)
print("Opening registry...")
registry = open_registry("data/", Config(max_block_size=64 * 1024))

# Upload
print("\nUploading...")
with open(__file__, "rb") as f:
    blocks = registry.ingest("basic_usage.py", f)
print(f"Stored basic_usage.py in {blocks} block(s)")

registry.ingest("notes.txt", b"Contract review scheduled for Monday.")

# Search
print("\nSearching...")
result = registry.search_keyword("contract")
print(f"'{result.keyword}' found in {result.count} file(s): {', '.join(result.found_in)}")

# Download
print("\nDownloading...")
sink = io.BytesIO()
registry.download("notes.txt", sink)
print(sink.getvalue().decode("utf-8"))

stats = registry.stats()
print(f"\n{stats.total_files} files, {stats.total_blocks} blocks, {stats.total_bytes} bytes")
