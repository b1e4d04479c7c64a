"""
FastAPI routers grouped by concern (JSON API, UI pages).

Each module exposes an APIRouter included by the app factory.
"""
