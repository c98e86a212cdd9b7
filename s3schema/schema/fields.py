"""Field definitions for collection schemas.

Fields are pydantic models discriminated on ``type``. The wire format is
camelCase JSON (``onlyInt``, ``autogeneratePattern``, ...) while Python code
uses snake_case attributes. Unknown keys are kept as-is so definitions
round-trip through the store untouched.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from s3schema.core.exceptions import SchemaValidationError

FIELD_TYPES = (
    "text", "number", "bool", "date", "select", "relation", "file", "autodate",
)


class SchemaField(BaseModel):
    """Attributes shared by every field type.

    ``id`` is assigned once and never changes; ``name`` is what records are
    accessed by and may be renamed.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        extra="allow",
    )

    id: str = Field(..., min_length=1, frozen=True)
    name: str = Field(..., min_length=1)
    hidden: bool = False
    presentable: bool = False
    required: bool = False
    system: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Dump the field in its wire shape."""
        return self.model_dump(by_alias=True)


class TextField(SchemaField):
    """Plain text. ``max == 0`` means no upper bound."""

    type: Literal["text"] = "text"
    min: int = 0
    max: int = 0
    pattern: str = ""
    autogenerate_pattern: str = ""
    primary_key: bool = False


class NumberField(SchemaField):
    type: Literal["number"] = "number"
    min: int | float | None = None
    max: int | float | None = None
    only_int: bool = False


class BoolField(SchemaField):
    type: Literal["bool"] = "bool"


class DateField(SchemaField):
    """Date/time value; bounds are ISO strings, empty for none."""

    type: Literal["date"] = "date"
    min: str = ""
    max: str = ""


class SelectField(SchemaField):
    """One or more values picked from a fixed list."""

    type: Literal["select"] = "select"
    values: list[str] = Field(default_factory=list)
    max_select: int = 1


class RelationField(SchemaField):
    """Reference to records of another collection."""

    type: Literal["relation"] = "relation"
    collection_id: str = ""
    cascade_delete: bool = False
    min_select: int = 0
    max_select: int = 1


class FileField(SchemaField):
    """Uploaded files. ``max_size`` is in bytes, 0 for the server default."""

    type: Literal["file"] = "file"
    max_select: int = 1
    max_size: int = 0
    mime_types: list[str] = Field(default_factory=list)
    thumbs: list[str] = Field(default_factory=list)
    protected: bool = False


class AutodateField(SchemaField):
    """Timestamp the server sets when a record is created and/or updated."""

    type: Literal["autodate"] = "autodate"
    on_create: bool = True
    on_update: bool = False


AnyField = Annotated[
    Union[
        TextField,
        NumberField,
        BoolField,
        DateField,
        SelectField,
        RelationField,
        FileField,
        AutodateField,
    ],
    Field(discriminator="type"),
]

_field_adapter = TypeAdapter(AnyField)


def parse_field(data: dict[str, Any] | SchemaField) -> SchemaField:
    """Build the right field model from a wire-shape descriptor.

    Args:
        data: Field descriptor, e.g. ``{"id": "text1", "name": "title", "type": "text"}``

    Returns:
        A TextField, NumberField, ... instance

    Raises:
        SchemaValidationError: If the type is unknown or the descriptor is malformed
    """
    if isinstance(data, SchemaField):
        return data.model_copy(deep=True)

    field_type = data.get("type")
    if field_type not in FIELD_TYPES:
        raise SchemaValidationError(
            f"Unknown field type {field_type!r}, expected one of: {', '.join(FIELD_TYPES)}",
            field=data.get("name"),
        )

    try:
        return _field_adapter.validate_python(data)
    except PydanticValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise SchemaValidationError(
            f"Invalid {field_type} field descriptor: {'; '.join(errors)}",
            field=data.get("name"),
            errors=errors,
        ) from e
