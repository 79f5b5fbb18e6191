"""Base request schema and shared field validators."""
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class RequestSchema(BaseModel):
    """Request body accepting camelCase or snake_case keys, nothing else."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='forbid',
        str_strip_whitespace=True,
    )

    def changes(self) -> dict:
        """Fields explicitly sent by the client, for partial updates."""
        return self.model_dump(exclude_unset=True)


def reject_null(*fields: str):
    """Optional update fields that may be omitted but never cleared."""
    def check(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value

    return field_validator(*fields)(check)
