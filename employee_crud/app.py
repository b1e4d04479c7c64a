from __future__ import annotations

import hashlib
import logging
import os
import pathlib
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.middleware.base import BaseHTTPMiddleware

from employee_crud.core.config import Settings, get_settings
from employee_crud.core.logging import setup_logging
from employee_crud.repositories import EmployeeStore
from employee_crud.repositories.json_storage import JSONEmployeeStore
from employee_crud.routers import employees as employees_router
from employee_crud.routers import pages as pages_router
from employee_crud.services.employee_service import EmployeeService

logger = logging.getLogger(__name__)

BASE = os.path.dirname(__file__)
WEB = os.path.join(BASE, "web")
TEMPLATES = os.path.join(BASE, "templates")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (CSP, anti clickjacking, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault(
            "Content-Security-Policy",
            "default-src 'self'; img-src 'self' data:; style-src 'self'; script-src 'self'; connect-src 'self'",
        )
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


class CachedStaticFiles(StaticFiles):
    def file_response(self, *args, **kwargs):
        resp = super().file_response(*args, **kwargs)
        # Assets are referenced with a content hash, so they can be cached for good
        resp.headers["Cache-Control"] = "public, max-age=31536000, immutable"
        return resp


def _fingerprint_asset(rel_path: str) -> str:
    """
    Append a short content hash: "style.css" -> "/static/style.css?v=<hash8>".
    Falls back to the plain path when the file is missing.
    """
    src = pathlib.Path(WEB) / rel_path
    href = "/static/" + rel_path.replace("\\", "/")
    if not src.exists():
        return href
    h = hashlib.sha1(src.read_bytes()).hexdigest()[:8]
    return f"{href}?v={h}"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Employee API iniciada (db=%s)", getattr(app.state.employee_service.store, "path", "memory"))
    yield
    logger.info("Employee API encerrando")


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    detail = errors[0].get("msg", "") if errors else ""
    logger.warning("Requisicao invalida em %s: %s", request.url.path, errors, extra={"path": request.url.path})
    message = "Corpo da requisicao invalido" + (f": {detail}" if detail else "")
    return JSONResponse({"error": message}, status_code=400)


def create_app(settings: Optional[Settings] = None, store: Optional[EmployeeStore] = None) -> FastAPI:
    """Factory compatível com uvicorn/gunicorn; store/settings injetáveis nos testes."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(title="Employee CRUD API", lifespan=lifespan)
    if store is None:
        store = JSONEmployeeStore(settings.db_file, reset_on_corrupt=settings.reset_on_corrupt)
    app.state.employee_service = EmployeeService(store)
    app.state.templates = Jinja2Templates(directory=TEMPLATES)
    app.state.assets = {"css": _fingerprint_asset("style.css"), "js": _fingerprint_asset("script.js")}

    origins = list(settings.cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.include_router(employees_router.router)
    app.include_router(pages_router.router)
    app.mount("/static", CachedStaticFiles(directory=WEB), name="static")
    return app


app = create_app()
