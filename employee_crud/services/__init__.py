"""
High-level use cases for the employee API.

Routers (FastAPI endpoints) call these services instead of manipulating the
JSON file directly.
"""
