"""Storage and versioning layer.

This package persists immutable numbered snapshots, their metadata
records, and the current-version pointer.
"""
