"""
Person endpoints.

People are addressed by a URL-encoded ``"First Last"`` segment, e.g.
``GET /api/person/John%20Doe``.  Creating or updating a person also
replaces the set of courses they are enrolled in.
"""

from typing import Dict, List, Tuple

from fastapi import APIRouter, Depends, status

from ...schemas.person import PersonCreate, PersonRead, PersonUpdate
from ...services.person_service import PersonService
from ..dependencies import get_person_service, person_full_name

router = APIRouter()


@router.get("", response_model=List[PersonRead])
async def list_people(service: PersonService = Depends(get_person_service)) -> List[PersonRead]:
    """List every person with their enrolled course ids."""
    return await service.list_people()


@router.get("/{name}", response_model=PersonRead)
async def get_person(
    full_name: Tuple[str, str] = Depends(person_full_name),
    service: PersonService = Depends(get_person_service),
) -> PersonRead:
    """Retrieve a person by full name.

    Returns 400 when the segment is not ``First Last`` and 404 when no
    person has exactly that first and last name.
    """
    return await service.get_person(*full_name)


@router.post("", response_model=PersonRead, status_code=status.HTTP_201_CREATED)
async def create_person(
    person: PersonCreate,
    service: PersonService = Depends(get_person_service),
) -> PersonRead:
    """Create a person and enroll them in ``courses``.

    Every course id must exist.  Returns 409 if a person with the same
    first and last name already exists.
    """
    return await service.create_person(person)


@router.put("/{name}", response_model=PersonRead)
async def update_person(
    person: PersonUpdate,
    full_name: Tuple[str, str] = Depends(person_full_name),
    service: PersonService = Depends(get_person_service),
) -> PersonRead:
    """Replace a person's fields and enrollments.

    If the body carries a different name, the person is only reachable
    under the new name afterwards.
    """
    return await service.update_person(*full_name, person)


@router.delete("/{name}")
async def delete_person(
    full_name: Tuple[str, str] = Depends(person_full_name),
    service: PersonService = Depends(get_person_service),
) -> Dict[str, str]:
    await service.delete_person(*full_name)
    return {"message": "Person deleted successfully"}
