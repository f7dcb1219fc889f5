"""
Course endpoints.

The ``{course_id}`` parameter is declared as a string so that a
non-numeric value reaches the service: GET and PUT report it as 400
``Invalid ID``, DELETE as 404 ``Course not found``.
"""

from typing import Dict, List

from fastapi import APIRouter, Depends, status

from ...schemas.course import CourseCreate, CourseRead, CourseUpdate
from ...services.course_service import CourseService
from ..dependencies import get_course_service

router = APIRouter()


@router.get("", response_model=List[CourseRead])
async def list_courses(service: CourseService = Depends(get_course_service)) -> List[CourseRead]:
    return await service.list_courses()


@router.get("/{course_id}", response_model=CourseRead)
async def get_course(course_id: str, service: CourseService = Depends(get_course_service)) -> CourseRead:
    return await service.get_course(course_id)


@router.post("", response_model=CourseRead, status_code=status.HTTP_201_CREATED)
async def create_course(
    course: CourseCreate,
    service: CourseService = Depends(get_course_service),
) -> CourseRead:
    """Create a course.  Returns 409 if the name is already in use."""
    return await service.create_course(course)


@router.put("/{course_id}", response_model=CourseRead)
async def update_course(
    course_id: str,
    course: CourseUpdate,
    service: CourseService = Depends(get_course_service),
) -> CourseRead:
    """Rename a course."""
    return await service.update_course(course_id, course)


@router.delete("/{course_id}")
async def delete_course(course_id: str, service: CourseService = Depends(get_course_service)) -> Dict[str, str]:
    """Delete a course and drop every enrollment in it."""
    await service.delete_course(course_id)
    return {"message": "Course deleted successfully"}
