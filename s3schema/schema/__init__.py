"""Collection and field schema models."""

from s3schema.schema.collection import Collection, FieldList
from s3schema.schema.fields import (
    AnyField,
    AutodateField,
    BoolField,
    DateField,
    FileField,
    NumberField,
    RelationField,
    SchemaField,
    SelectField,
    TextField,
    parse_field,
)

__all__ = [
    "AnyField",
    "AutodateField",
    "BoolField",
    "Collection",
    "DateField",
    "FieldList",
    "FileField",
    "NumberField",
    "RelationField",
    "SchemaField",
    "SelectField",
    "TextField",
    "parse_field",
]
