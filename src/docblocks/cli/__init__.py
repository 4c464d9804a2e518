"""
Command-line interface for docblocks.
"""
