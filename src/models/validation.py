"""Schema validation of parsed model output.

Turns pydantic ValidationErrors into SchemaViolation errors that name the
offending field paths using wire (camelCase) names.
"""

from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from src.utils.errors import SchemaViolation

ModelT = TypeVar("ModelT", bound=BaseModel)


def _field_path(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "<root>"


def validate_payload(model_cls: Type[ModelT], payload: Any, stage: Optional[str] = None) -> ModelT:
    """Validate a parsed JSON value against a model, applying its defaults.

    Args:
        model_cls: Target model class.
        payload: Value returned by the JSON parser.
        stage: Workflow step id, included in the error for context.

    Returns:
        Validated model instance.

    Raises:
        SchemaViolation: If the payload does not satisfy the schema.
    """
    try:
        return model_cls.model_validate(payload)
    except ValidationError as e:
        errors = [
            {"path": _field_path(error["loc"]), "message": error["msg"], "type": error["type"]}
            for error in e.errors()
        ]
        raise SchemaViolation(model_cls.__name__, errors, stage=stage) from e
