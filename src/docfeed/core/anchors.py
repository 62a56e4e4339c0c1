"""Ordered multimap of anchor text to link targets."""

from __future__ import annotations

from collections.abc import Iterator, KeysView
from dataclasses import dataclass

from ..errors import InvalidArgument, NullArgument


@dataclass(frozen=True)
class AnchorEntry:
    """One recorded anchor. ``text`` is the key and may be None; ``uri`` never is."""

    text: str | None
    uri: str

    def __iter__(self) -> Iterator[str | None]:
        # allows ``for text, uri in anchors.entries()``
        yield self.text
        yield self.uri


class AnchorView:
    """
    Read-only view over recorded anchors.

    All reads reflect later additions made through the owning AnchorMap.
    Every method returns a fresh snapshot, so callers may keep or mutate the
    results without affecting the map.
    """

    def __init__(self, entries: list[AnchorEntry], index: dict[str | None, list[str]]):
        self._entries = entries
        # text -> uris; dict order is the first occurrence of each text
        self._index = index

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[AnchorEntry]:
        return iter(list(self._entries))

    def __repr__(self) -> str:
        pairs = ", ".join(f"{e.text!r}={e.uri}" for e in self._entries)
        return f"{type(self).__name__}([{pairs}])"

    def entries(self) -> list[AnchorEntry]:
        """All anchors in insertion order, duplicates included."""
        return list(self._entries)

    def key_list(self) -> list[str | None]:
        """Anchor texts in insertion order, including duplicates and None."""
        return [e.text for e in self._entries]

    def key_set(self) -> KeysView[str | None]:
        """Distinct anchor texts, ordered by first occurrence."""
        return dict.fromkeys(self._index).keys()

    def get(self, text: str | None) -> list[str]:
        """URIs recorded for ``text`` in insertion order; empty if never seen."""
        return list(self._index.get(text, ()))


class AnchorMap(AnchorView):
    """
    Append-only record of the links found in one document.

    Behaves like a list multimap: two anchors with the same text (including
    two with no text) are both kept. Not thread-safe; one writer populates
    it, then readers consume it.
    """

    def __init__(self) -> None:
        super().__init__([], {})

    def add_anchor(self, uri: str, text: str | None = None) -> None:
        if uri is None:
            raise NullArgument("anchor uri must not be None")
        if text is not None and not isinstance(text, str):
            raise InvalidArgument(f"anchor text must be a string or None, got {type(text).__name__}")
        self._entries.append(AnchorEntry(text, uri))
        self._index.setdefault(text, []).append(uri)

    def view(self) -> AnchorView:
        """A read-only view sharing this map's storage."""
        return AnchorView(self._entries, self._index)
