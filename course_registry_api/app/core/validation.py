"""
Payload validation.

Request schemas are pydantic models; ``validate_payload`` accepts either
an instance of the schema or a plain mapping and reports pydantic's
failures as a ``ValidationError`` naming every violated field.
"""

from typing import Any, List, Type, TypeVar

import pydantic

from .errors import ValidationError

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def error_fields(errors: List[dict]) -> List[str]:
    """Return the dotted field paths of pydantic error entries.

    The ``body`` prefix FastAPI adds to request errors is dropped.
    """
    fields: List[str] = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(loc) or "body"
        if field not in fields:
            fields.append(field)
    return fields


def describe_errors(errors: List[dict]) -> str:
    parts = []
    for error in errors:
        loc = ".".join(str(part) for part in error.get("loc", ()) if part != "body") or "body"
        parts.append(f"{loc}: {error.get('msg', 'invalid value')}")
    return "Invalid payload: " + "; ".join(parts)


def validate_payload(model: Type[ModelT], payload: Any) -> ModelT:
    if isinstance(payload, model):
        return payload
    if isinstance(payload, pydantic.BaseModel):
        payload = payload.model_dump()
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as exc:
        errors = exc.errors()
        raise ValidationError(describe_errors(errors), fields=error_fields(errors)) from exc
