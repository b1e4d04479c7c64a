"""Domain helpers for employee records (field coercion, validation, ids)."""
from __future__ import annotations

import math
import re
from typing import Any, Iterable, Mapping, Optional

FIELDS = ("name", "role", "salary")
REQUIRED_FIELDS_MESSAGE = "Campos obrigatorios: name, role, salary"
ID_PATTERN = re.compile(r"-?[0-9]+")


class InvalidFieldError(ValueError):
    """Raised when a single field cannot be coerced to its stored type."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


def coerce_text(field: str, value: Any) -> str:
    text = str(value).strip()
    if not text:
        raise InvalidFieldError(field, f"Campo '{field}' nao pode ser vazio")
    return text


def coerce_salary(value: Any) -> int | float:
    """
    Convert a salary to a JSON number. Ints and floats are kept as given,
    numeric strings are parsed; anything else is rejected.
    """
    if isinstance(value, bool):
        raise InvalidFieldError("salary", "Campo 'salary' deve ser numerico")
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        raw = value.strip()
        try:
            number = int(raw)
        except ValueError:
            try:
                number = float(raw)
            except ValueError:
                raise InvalidFieldError("salary", "Campo 'salary' deve ser numerico") from None
    else:
        raise InvalidFieldError("salary", "Campo 'salary' deve ser numerico")
    if isinstance(number, float) and not math.isfinite(number):
        raise InvalidFieldError("salary", "Campo 'salary' deve ser numerico")
    return number


def has_required_fields(payload: Mapping[str, Any]) -> bool:
    """name/role must be truthy; salary may be 0 but not absent."""
    return bool(payload.get("name")) and bool(payload.get("role")) and payload.get("salary") is not None


def build_record(employee_id: int, payload: Mapping[str, Any]) -> dict:
    return {
        "id": employee_id,
        "name": coerce_text("name", payload["name"]),
        "role": coerce_text("role", payload["role"]),
        "salary": coerce_salary(payload["salary"]),
    }


def apply_changes(record: dict, payload: Mapping[str, Any]) -> dict:
    """
    Overwrite only the fields present (and not None) in payload. All fields
    are coerced before the record is touched so a bad value leaves it intact.
    """
    changes: dict = {}
    for field in ("name", "role"):
        if payload.get(field) is not None:
            changes[field] = coerce_text(field, payload[field])
    if payload.get("salary") is not None:
        changes["salary"] = coerce_salary(payload["salary"])
    record.update(changes)
    return record


def next_id(records: Iterable[Mapping[str, Any]]) -> int:
    ids = [record.get("id") or 0 for record in records]
    return max(ids, default=0) + 1


def find_index(records: list[dict], employee_id: int) -> Optional[int]:
    for idx, record in enumerate(records):
        if record.get("id") == employee_id:
            return idx
    return None


def parse_id(value: Any) -> Optional[int]:
    """Path ids that are not plain decimal integers resolve to no record."""
    text = str(value).strip()
    if not ID_PATTERN.fullmatch(text):
        return None
    return int(text)
