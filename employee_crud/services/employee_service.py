"""Employee use cases (list, create, update, delete) over an EmployeeStore."""

from __future__ import annotations

import logging
import threading
from typing import Any, Mapping

from employee_crud.core.errors import NotFoundError, ValidationError
from employee_crud.domain.employees import (
    REQUIRED_FIELDS_MESSAGE,
    InvalidFieldError,
    apply_changes,
    build_record,
    find_index,
    has_required_fields,
    next_id,
    parse_id,
)
from employee_crud.repositories import EmployeeStore

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Registro nao encontrado"


class EmployeeService:
    """
    Orchestrates load -> mutate -> save cycles against the store.

    Every store access (reads included, since load() may initialize or reset
    the file) is serialized by a lock so concurrent requests in this process
    cannot overwrite each other's changes. Processes sharing the same file
    are still last-writer-wins.
    """

    def __init__(self, store: EmployeeStore) -> None:
        self.store = store
        self._write_lock = threading.Lock()

    def list_employees(self) -> list[dict]:
        # load() may create or reset the file, so reads take the writer lock too
        with self._write_lock:
            return self.store.load()

    def get_employee(self, employee_id: Any) -> dict:
        with self._write_lock:
            records = self.store.load()
        idx = self._locate(records, employee_id)
        return records[idx]

    def create_employee(self, payload: Mapping[str, Any]) -> dict:
        if not has_required_fields(payload):
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)
        with self._write_lock:
            records = self.store.load()
            try:
                record = build_record(next_id(records), payload)
            except InvalidFieldError as exc:
                raise ValidationError(str(exc)) from exc
            records.append(record)
            self.store.save(records)
        logger.info("Funcionario %s criado", record["id"], extra={"employee_id": record["id"]})
        return record

    def update_employee(self, employee_id: Any, payload: Mapping[str, Any]) -> dict:
        with self._write_lock:
            records = self.store.load()
            idx = self._locate(records, employee_id)
            try:
                record = apply_changes(records[idx], payload)
            except InvalidFieldError as exc:
                raise ValidationError(str(exc)) from exc
            self.store.save(records)
        logger.info("Funcionario %s atualizado", record["id"], extra={"employee_id": record["id"]})
        return record

    def delete_employee(self, employee_id: Any) -> dict:
        with self._write_lock:
            records = self.store.load()
            idx = self._locate(records, employee_id)
            removed = records.pop(idx)
            self.store.save(records)
        logger.info("Funcionario %s removido", removed["id"], extra={"employee_id": removed["id"]})
        return removed

    @staticmethod
    def _locate(records: list[dict], employee_id: Any) -> int:
        parsed = parse_id(employee_id)
        idx = find_index(records, parsed) if parsed is not None else None
        if idx is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return idx
