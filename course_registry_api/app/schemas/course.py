"""
Pydantic models for courses.
"""

from pydantic import BaseModel, Field, field_validator


class CourseBase(BaseModel):
    name: str = Field(..., min_length=1, examples=["Math 101"])

    @field_validator("name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class CourseCreate(CourseBase):
    """Schema for creating a course."""


class CourseUpdate(CourseBase):
    """Rename payload; ``name`` is the only mutable field."""


class CourseRead(CourseBase):
    id: int

    model_config = {
        "from_attributes": True,
    }
