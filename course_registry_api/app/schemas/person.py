"""
Pydantic models for people.

``PersonBase`` holds the scalar fields stored in the ``person`` table.
``PersonCreate`` (also used for full-replace updates) adds the list of
course ids the person is enrolled in; ``PersonRead`` is the response
shape and carries the assigned ``id`` and the current enrollments.
"""

from typing import List, Literal

from pydantic import BaseModel, Field, StrictInt, field_validator

PERSON_TYPES = ("professor", "student")


class PersonBase(BaseModel):
    first_name: str = Field(..., min_length=1, examples=["John"])
    last_name: str = Field(..., min_length=1, examples=["Doe"])
    type: Literal["professor", "student"] = Field(..., examples=["student"])
    age: StrictInt = Field(..., gt=0, examples=[20])

    @field_validator("first_name")
    @classmethod
    def first_name_is_single_word(cls, v: str) -> str:
        """Lookups split ``"First Last"`` on the first space."""
        if " " in v:
            raise ValueError("first_name must not contain spaces")
        return v

    @field_validator("first_name", "last_name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class PersonCreate(PersonBase):
    """Payload for creating or fully replacing a person."""

    courses: List[StrictInt] = Field(default_factory=list, examples=[[1, 2]])


class PersonUpdate(PersonCreate):
    """Full-replace payload; omitted ``courses`` clears the enrollments."""


class PersonRead(PersonBase):
    id: int
    courses: List[int] = Field(default_factory=list)

    model_config = {
        "from_attributes": True,
    }
