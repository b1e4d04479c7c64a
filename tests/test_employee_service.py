from __future__ import annotations

import sys
import threading
import time
from pathlib import Path

import pytest

# Garante que o pacote seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from employee_crud.core.errors import NotFoundError, ValidationError  # noqa: E402
from employee_crud.repositories.json_storage import JSONEmployeeStore  # noqa: E402
from employee_crud.repositories.memory import InMemoryEmployeeStore  # noqa: E402
from employee_crud.services.employee_service import EmployeeService  # noqa: E402


def _service(records=None):
    store = InMemoryEmployeeStore(records)
    return EmployeeService(store), store


def test_first_record_gets_id_one():
    svc, _ = _service()
    record = svc.create_employee({"name": "Ana", "role": "Dev", "salary": 5000})
    assert record == {"id": 1, "name": "Ana", "role": "Dev", "salary": 5000}


def test_new_id_is_max_plus_one_even_with_gaps():
    svc, _ = _service([
        {"id": 1, "name": "Ana", "role": "Dev", "salary": 1},
        {"id": 3, "name": "Bia", "role": "QA", "salary": 2},
    ])
    record = svc.create_employee({"name": "Caio", "role": "Ops", "salary": 3})
    assert record["id"] == 4
    assert [r["id"] for r in svc.list_employees()] == [1, 3, 4]


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"role": "Dev", "salary": 10},
        {"name": "", "role": "Dev", "salary": 10},
        {"name": "Ana", "role": "Dev"},
        {"name": "Ana", "role": "Dev", "salary": None},
    ],
)
def test_create_requires_all_fields(payload):
    svc, store = _service()
    with pytest.raises(ValidationError) as err:
        svc.create_employee(payload)
    assert err.value.message == "Campos obrigatorios: name, role, salary"
    assert store.saves == 0


def test_create_accepts_zero_salary_and_coerces_types():
    svc, _ = _service()
    zero = svc.create_employee({"name": "Ana", "role": "Estagio", "salary": 0})
    parsed = svc.create_employee({"name": 42, "role": " Dev ", "salary": "1234.5"})
    assert zero["salary"] == 0
    assert parsed == {"id": 2, "name": "42", "role": "Dev", "salary": 1234.5}


@pytest.mark.parametrize("salary", ["abc", "", True, [1], "nan"])
def test_create_rejects_non_numeric_salary(salary):
    svc, store = _service()
    with pytest.raises(ValidationError):
        svc.create_employee({"name": "Ana", "role": "Dev", "salary": salary})
    assert store.saves == 0


def test_partial_update_keeps_absent_fields():
    svc, _ = _service([{"id": 1, "name": "Ana", "role": "Dev", "salary": 5000}])
    record = svc.update_employee(1, {"name": "Ana Maria", "role": "Lead"})
    assert record == {"id": 1, "name": "Ana Maria", "role": "Lead", "salary": 5000}

    record = svc.update_employee("1", {"salary": 6000})
    assert record == {"id": 1, "name": "Ana Maria", "role": "Lead", "salary": 6000}
    assert svc.get_employee(1) == record


def test_update_ignores_id_and_unknown_keys():
    svc, _ = _service([{"id": 1, "name": "Ana", "role": "Dev", "salary": 5000}])
    record = svc.update_employee(1, {"id": 99, "team": "core", "name": None})
    assert record == {"id": 1, "name": "Ana", "role": "Dev", "salary": 5000}


def test_update_with_invalid_value_leaves_record_untouched():
    svc, store = _service([{"id": 1, "name": "Ana", "role": "Dev", "salary": 5000}])
    with pytest.raises(ValidationError):
        svc.update_employee(1, {"name": "Bia", "salary": "muito"})
    with pytest.raises(ValidationError):
        svc.update_employee(1, {"role": "   "})
    assert store.saves == 0
    assert svc.get_employee(1)["name"] == "Ana"


@pytest.mark.parametrize("employee_id", [2, "abc", "", None])
def test_update_and_delete_of_unknown_id(employee_id):
    original = [{"id": 1, "name": "Ana", "role": "Dev", "salary": 5000}]
    svc, store = _service(original)
    with pytest.raises(NotFoundError):
        svc.update_employee(employee_id, {"name": "X"})
    with pytest.raises(NotFoundError) as err:
        svc.delete_employee(employee_id)
    assert err.value.message == "Registro nao encontrado"
    assert store.saves == 0
    assert svc.list_employees() == original


def test_create_update_delete_cycle():
    svc, _ = _service()
    created = svc.create_employee({"name": "Ana", "role": "Dev", "salary": 5000})
    svc.update_employee(created["id"], {"role": "Tech Lead"})
    removed = svc.delete_employee(created["id"])
    assert removed == {"id": 1, "name": "Ana", "role": "Tech Lead", "salary": 5000}
    assert all(r["id"] != created["id"] for r in svc.list_employees())


class _SlowStore(InMemoryEmployeeStore):
    """Widens the load/save window so unsynchronized writers would collide."""

    def load(self):
        records = super().load()
        time.sleep(0.01)
        return records


def test_concurrent_creates_do_not_lose_updates():
    svc = EmployeeService(_SlowStore())
    barrier = threading.Barrier(8)

    def worker(n):
        barrier.wait()
        svc.create_employee({"name": f"Func {n}", "role": "Dev", "salary": n})

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    records = svc.list_employees()
    assert sorted(r["id"] for r in records) == list(range(1, 9))
    assert sorted(r["salary"] for r in records) == list(range(8))


def test_reader_initializing_missing_file_does_not_drop_concurrent_create(tmp_path, monkeypatch):
    db = tmp_path / "db.json"
    svc = EmployeeService(JSONEmployeeStore(db))
    real_exists = Path.exists
    reader_stalled = threading.Event()

    def stalling_exists(self, *args, **kwargs):
        result = real_exists(self, *args, **kwargs)
        if self == db and threading.current_thread().name == "reader" and not reader_stalled.is_set():
            reader_stalled.set()
            time.sleep(0.1)
        return result

    monkeypatch.setattr(Path, "exists", stalling_exists)
    reader = threading.Thread(target=svc.list_employees, name="reader")
    reader.start()
    assert reader_stalled.wait(2)

    created = svc.create_employee({"name": "Ana", "role": "Dev", "salary": 5000})
    reader.join()

    assert svc.list_employees() == [created]


def test_path_ids_must_be_plain_integers():
    svc, _ = _service([{"id": 10, "name": "Ana", "role": "Dev", "salary": 1}])
    assert svc.get_employee(" 10 ")["id"] == 10
    for raw in ("1_0", "+10", "10.0", "1e1", "١٠"):
        with pytest.raises(NotFoundError):
            svc.get_employee(raw)
