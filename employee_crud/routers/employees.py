from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from employee_crud.core.errors import EmployeeError, StorageError
from employee_crud.services.employee_service import EmployeeService

router = APIRouter(prefix="/api/employees", tags=["employees"])
logger = logging.getLogger(__name__)


def _get_employee_service(request: Request) -> EmployeeService:
    svc = getattr(getattr(request.app, "state", None), "employee_service", None)
    if not svc:
        raise RuntimeError("EmployeeService nao configurado")
    return svc


def _error_response(err: EmployeeError, action: str) -> JSONResponse:
    if isinstance(err, StorageError):
        logger.exception("%s: %s", action, err.message)
        return JSONResponse({"error": f"{action}: {err.message}"}, status_code=err.status_code)
    return JSONResponse(err.to_response(), status_code=err.status_code)


@router.get("")
def list_employees(request: Request):
    svc = _get_employee_service(request)
    try:
        items = svc.list_employees()
    except EmployeeError as exc:
        return _error_response(exc, "Erro lendo banco")
    return JSONResponse(items)


@router.get("/{employee_id}")
def get_employee(employee_id: str, request: Request):
    svc = _get_employee_service(request)
    try:
        record = svc.get_employee(employee_id)
    except EmployeeError as exc:
        return _error_response(exc, "Erro lendo banco")
    return JSONResponse(record)


@router.post("")
def create_employee(request: Request, payload: Optional[dict] = Body(None)):
    svc = _get_employee_service(request)
    try:
        record = svc.create_employee(payload or {})
    except EmployeeError as exc:
        return _error_response(exc, "Erro criando registro")
    return JSONResponse(record, status_code=201)


@router.put("/{employee_id}")
def update_employee(employee_id: str, request: Request, payload: Optional[dict] = Body(None)):
    svc = _get_employee_service(request)
    try:
        record = svc.update_employee(employee_id, payload or {})
    except EmployeeError as exc:
        return _error_response(exc, "Erro atualizando")
    return JSONResponse(record)


@router.delete("/{employee_id}")
def delete_employee(employee_id: str, request: Request):
    svc = _get_employee_service(request)
    try:
        removed = svc.delete_employee(employee_id)
    except EmployeeError as exc:
        return _error_response(exc, "Erro removendo")
    return JSONResponse({"removed": removed})
