"""Entry point for the employee FastAPI app."""
from employee_crud.app import app, create_app

__all__ = ["app", "create_app"]
