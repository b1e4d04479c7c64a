"""Error taxonomy shared by the store, services and routers."""

from __future__ import annotations


class EmployeeError(Exception):
    """Base error carrying the HTTP status the routers should answer with."""

    code = "error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"error": self.message}


class ValidationError(EmployeeError):
    """Missing or malformed input fields."""

    code = "invalid"
    status_code = 400


class NotFoundError(EmployeeError):
    """No record with the requested id."""

    code = "not_found"
    status_code = 404


class StorageError(EmployeeError):
    """Filesystem or parse failure on the backing JSON file."""

    code = "storage"
    status_code = 500
