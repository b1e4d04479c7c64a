"""In-memory store with the same interface as JSONEmployeeStore."""

from __future__ import annotations

import copy
from typing import Iterable, Optional


class InMemoryEmployeeStore:
    def __init__(self, records: Optional[Iterable[dict]] = None) -> None:
        self._records: list[dict] = copy.deepcopy(list(records or []))
        self.saves = 0

    def ensure_initialized(self) -> None:
        return None

    def load(self) -> list[dict]:
        return copy.deepcopy(self._records)

    def save(self, records: list[dict]) -> None:
        self._records = copy.deepcopy(list(records))
        self.saves += 1
