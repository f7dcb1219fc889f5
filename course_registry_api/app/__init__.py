"""
Application package.

``core`` holds settings, logging, the SQLite store and the error
taxonomy; ``schemas`` the pydantic payloads; ``services`` the person,
course and enrollment logic; ``api`` the FastAPI routers.
"""

from .main import app, create_app  # noqa: F401
