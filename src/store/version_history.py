"""Version history listing."""

from __future__ import annotations

from core.types import VersionMetadata
from store.metadata_store import VersionMetadataStore


class VersionHistory:
    """Enumerates persisted versions in ascending order."""

    def __init__(self, metadata_store: VersionMetadataStore) -> None:
        self._metadata_store = metadata_store

    def list_all(self) -> list[VersionMetadata]:
        """Return every persisted version record, ascending by number."""
        return [self._metadata_store.load(number) for number in self._metadata_store.list_numbers()]

    def list_last(self, count: int | None) -> list[VersionMetadata]:
        """Return the last ``count`` records, ascending.

        Args:
            count: Number of trailing entries to keep; None keeps all.

        Returns:
            Ascending record list clamped to the available history.
        """
        entries = self.list_all()
        if count is None:
            return entries
        start_index = max(0, len(entries) - count)
        return entries[start_index:]


def render_history(entries: list[VersionMetadata]) -> str:
    """Render records newest first as ``N: <first message line>`` lines."""
    return "\n".join(f"{entry.number}: {entry.summary}" for entry in reversed(entries))
