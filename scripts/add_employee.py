#!/usr/bin/env python3
"""
Cadastrar um funcionario diretamente no arquivo JSON (sem subir a API).

Uso:
  python scripts/add_employee.py --name Ana --role Dev --salary 5000 [--db data/db.json]
"""
from __future__ import annotations

import argparse
import sys

from employee_crud.core.config import get_settings
from employee_crud.repositories.json_storage import JSONEmployeeStore
from employee_crud.services.employee_service import EmployeeService


def main(argv: list[str] | None = None) -> dict:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Cadastrar funcionario no arquivo JSON")
    ap.add_argument("--name", required=True, help="Nome do funcionario")
    ap.add_argument("--role", required=True, help="Funcao/cargo")
    ap.add_argument("--salary", required=True, help="Salario (numero)")
    ap.add_argument("--db", default=str(settings.db_file), help="Arquivo JSON (default: EMPLOYEES_DB_FILE)")
    args = ap.parse_args(argv)

    store = JSONEmployeeStore(args.db, reset_on_corrupt=settings.reset_on_corrupt)
    record = EmployeeService(store).create_employee(
        {"name": args.name, "role": args.role, "salary": args.salary}
    )
    print("OK: funcionario cadastrado")
    print(f"  ID: {record['id']}")
    print(f"  Nome: {record['name']}")
    print(f"  Funcao: {record['role']}")
    print(f"  Salario: {record['salary']}")
    return record


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - uso CLI
        sys.stderr.write(f"Erro: {exc}\n")
        raise SystemExit(1)
