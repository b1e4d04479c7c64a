"""
Core utilities shared across the employee API.

This package hosts configuration (env vars, storage paths), logging setup
and the error taxonomy. Routers/services depend on these primitives instead
of reading the environment or inventing their own exceptions.
"""
