"""Employee CRUD service: FastAPI backend over a single JSON file."""

__version__ = "1.0.0"
