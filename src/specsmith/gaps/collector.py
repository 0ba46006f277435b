# src/specsmith/gaps/collector.py
from __future__ import annotations

import logging
from collections.abc import Iterator

logger = logging.getLogger(__name__)


class GapCollector:
    """Append-only, ordered sink for diagnostics recorded during one run.

    Messages are kept in encounter order and never deduplicated. One instance
    belongs to exactly one run; the orchestrator creates it and passes it to
    every validating function.
    """

    def __init__(self) -> None:
        self._gaps: list[str] = []

    def record(self, message: str) -> None:
        text = str(message)
        self._gaps.append(text)
        logger.debug("gap #%d: %s", len(self._gaps), text)

    def all(self) -> tuple[str, ...]:
        """Returns a snapshot of the recorded messages."""
        return tuple(self._gaps)

    def is_empty(self) -> bool:
        return not self._gaps

    def __len__(self) -> int:
        return len(self._gaps)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._gaps))
