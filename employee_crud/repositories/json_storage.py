"""
JSON file persistence for the employee list.

The whole array is read before any mutation and rewritten after it; writes
go through a temp file + os.replace so readers never see a half-written file.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
import json
import logging
import os
import shutil
import tempfile

from employee_crud.core.errors import StorageError

logger = logging.getLogger(__name__)


def dumps(records: list[dict]) -> str:
    return json.dumps(records, ensure_ascii=False, indent=2) + "\n"


def _invalid_record(records: list) -> str | None:
    """Describe the first element that is not an object with an integer id."""
    for pos, record in enumerate(records):
        if not isinstance(record, dict):
            return f"elemento {pos} nao e um objeto"
        record_id = record.get("id")
        if isinstance(record_id, bool) or not isinstance(record_id, int):
            return f"elemento {pos} sem id inteiro"
    return None


class JSONEmployeeStore:
    """Backing file holding a single JSON array of employee records."""

    def __init__(self, path: Path | str, *, reset_on_corrupt: bool = True) -> None:
        self.path = Path(path)
        self.reset_on_corrupt = reset_on_corrupt

    def ensure_initialized(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if self.path.exists():
                return
            # "x" never clobbers a file another writer created in the meantime
            with self.path.open("x", encoding="utf-8") as handle:
                handle.write(dumps([]))
        except FileExistsError:
            return
        except OSError as exc:
            raise StorageError(f"Erro criando DB: {exc}") from exc

    def load(self) -> list[dict]:
        self.ensure_initialized()
        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Erro lendo DB: {exc}") from exc
        try:
            data = json.loads(content or "[]")
        except ValueError as exc:
            return self._handle_corrupt(content, f"JSON invalido ({exc})")
        if not isinstance(data, list):
            return self._handle_corrupt(content, f"esperado um array, encontrado {type(data).__name__}")
        problem = _invalid_record(data)
        if problem:
            return self._handle_corrupt(content, problem)
        return data

    def save(self, records: list[dict]) -> None:
        self.ensure_initialized()
        try:
            payload = dumps(records)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Erro serializando DB: {exc}") from exc
        try:
            self._replace(payload)
        except OSError as exc:
            raise StorageError(f"Erro gravando DB: {exc}") from exc

    def _replace(self, payload: str) -> None:
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self.path)
        except OSError:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def _handle_corrupt(self, content: str, reason: str) -> list[dict]:
        if not self.reset_on_corrupt:
            raise StorageError(f"DB corrompido em {self.path}: {reason}")
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        backup = self.path.with_name(f"{self.path.name}.corrupt-{stamp}")
        try:
            # Only reset if nobody rewrote the file since it was read
            if self.path.read_text(encoding="utf-8") != content:
                return self.load()
            shutil.copy2(self.path, backup)
            self._replace(dumps([]))
        except OSError as exc:
            raise StorageError(f"Erro resetando DB corrompido: {exc}") from exc
        logger.warning("DB corrompido (%s); conteudo salvo em %s e arquivo resetado para []", reason, backup)
        return []
