"""
FastAPI dependencies shared by the endpoint modules.

The store handle lives on ``app.state`` (set by ``create_app``) and is
handed to a fresh service object per request.
"""

from typing import Tuple

from fastapi import Depends, Request

from ..core.db import Store
from ..services.course_service import CourseService
from ..services.identity import resolve_full_name
from ..services.person_service import PersonService


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_person_service(store: Store = Depends(get_store)) -> PersonService:
    return PersonService(store)


def get_course_service(store: Store = Depends(get_store)) -> CourseService:
    return CourseService(store)


def person_full_name(request: Request, name: str) -> Tuple[str, str]:
    """Resolve the ``{name}`` path parameter into ``(first, last)``.

    The router has already percent-decoded ``name``; the identity
    resolver needs the segment exactly as it was sent, so it is taken
    from the raw request path when the server provides one.
    """
    raw_path = request.scope.get("raw_path")
    if raw_path:
        segment = raw_path.split(b"?", 1)[0].decode("latin-1").rsplit("/", 1)[-1]
    else:
        segment = name
    return resolve_full_name(segment)
