# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-document generation counters guarding against stale dispatch results."""

from __future__ import annotations

from threading import Lock


class DocumentGenerations:
    """Track the latest dispatch pass started for each document.

    Each save calls :meth:`begin` and keeps the returned number; once its
    results are ready, :meth:`is_current` tells whether a newer save for the
    same document has started in the meantime.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._latest: dict[str, int] = {}

    def begin(self, document: str) -> int:
        """Start a new pass for ``document`` and return its generation number."""

        with self._lock:
            generation = self._latest.get(document, 0) + 1
            self._latest[document] = generation
            return generation

    def is_current(self, document: str, generation: int) -> bool:
        """Return ``True`` when ``generation`` is still the latest pass for ``document``."""

        with self._lock:
            return self._latest.get(document) == generation

    def forget(self, document: str) -> None:
        """Drop the counter of a closed document."""

        with self._lock:
            self._latest.pop(document, None)


__all__ = ["DocumentGenerations"]
