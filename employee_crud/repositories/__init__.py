"""
Persistence adapters.

These modules encapsulate how the employee list is stored/retrieved (today a
JSON file, in tests an in-memory list). Services depend on the EmployeeStore
protocol rather than touching the JSON file.
"""

from __future__ import annotations

from typing import Protocol


class EmployeeStore(Protocol):
    def ensure_initialized(self) -> None: ...

    def load(self) -> list[dict]: ...

    def save(self, records: list[dict]) -> None: ...
