# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Ordered buffer holding deferred calls until they are flushed."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from .types import JSONValue

BatchEntry = dict[str, JSONValue]


class BatchCache:
    """Append-only, insertion-ordered collection of resolved request mappings."""

    def __init__(self) -> None:
        self._entries: list[BatchEntry] = []

    def append(self, entry: Mapping[str, JSONValue]) -> None:
        """Queue a copy of ``entry`` behind the entries already cached."""

        self._entries.append(dict(entry))

    def entries(self) -> tuple[BatchEntry, ...]:
        """Return copies of the cached entries in insertion order."""

        return tuple(dict(entry) for entry in self._entries)

    def drain(self) -> tuple[BatchEntry, ...]:
        """Return the cached entries and empty the cache."""

        entries = tuple(self._entries)
        self._entries = []
        return entries

    def clear(self) -> None:
        self._entries.clear()

    def __iter__(self) -> Iterator[BatchEntry]:
        return iter(self.entries())

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)


__all__ = ["BatchCache", "BatchEntry"]
