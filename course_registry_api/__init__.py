"""
Top-level package for the Course Registry API.

The package provides no public exports; the application lives in
``course_registry_api.app`` and is importable as
``course_registry_api.app.main:app``.
"""

__all__ = []
