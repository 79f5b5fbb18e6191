"""Request body validation."""
from typing import Type, TypeVar

from flask import request
from pydantic import BaseModel, ValidationError as PydanticValidationError

from sams.utils.exceptions import ValidationError

SchemaT = TypeVar('SchemaT', bound=BaseModel)


def parse_body(schema: Type[SchemaT]) -> SchemaT:
    """Validate the JSON request body against a request schema.

    Raises ValidationError with one entry per offending field.
    """
    data = request.get_json(silent=True)

    if data is None:
        raise ValidationError("Request body must be JSON")

    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        details = [
            {
                'field': '.'.join(str(part) for part in err['loc']) or '__root__',
                'message': err['msg']
            }
            for err in e.errors()
        ]
        raise ValidationError("Invalid input", details=details)
