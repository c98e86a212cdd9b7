"""Save-time validation of collection definitions."""

import re

from s3schema.core.exceptions import SchemaValidationError
from s3schema.schema.collection import Collection
from s3schema.schema.fields import (
    FileField,
    NumberField,
    RelationField,
    SchemaField,
    SelectField,
    TextField,
)

NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _field_errors(f: SchemaField) -> list[str]:
    errors = []
    if not NAME_PATTERN.match(f.name):
        errors.append(f"field '{f.name}': invalid name")

    if isinstance(f, TextField):
        if f.min < 0 or f.max < 0:
            errors.append(f"field '{f.name}': min and max must not be negative")
        elif f.max and f.min > f.max:
            errors.append(f"field '{f.name}': min is greater than max")
        for attr in ("pattern", "autogenerate_pattern"):
            value = getattr(f, attr)
            if value:
                try:
                    re.compile(value)
                except re.error as e:
                    errors.append(f"field '{f.name}': invalid {attr}: {e}")
    elif isinstance(f, NumberField):
        if f.min is not None and f.max is not None and f.min > f.max:
            errors.append(f"field '{f.name}': min is greater than max")
    elif isinstance(f, SelectField):
        if not f.values:
            errors.append(f"field '{f.name}': values must not be empty")
        elif len(set(f.values)) != len(f.values):
            errors.append(f"field '{f.name}': values must be unique")
        elif not 1 <= f.max_select <= len(f.values):
            errors.append(
                f"field '{f.name}': maxSelect must be between 1 and {len(f.values)}"
            )
    elif isinstance(f, RelationField):
        if not f.collection_id:
            errors.append(f"field '{f.name}': collectionId is required")
    elif isinstance(f, FileField):
        if f.max_select < 1:
            errors.append(f"field '{f.name}': maxSelect must be at least 1")
        if f.max_size < 0:
            errors.append(f"field '{f.name}': maxSize must not be negative")

    return errors


def validate_collection(collection: Collection) -> None:
    """Check a collection definition before it is persisted.

    Raises:
        SchemaValidationError: Listing every problem found
    """
    errors = []
    if not collection.id:
        errors.append("collection id must not be empty")
    if not NAME_PATTERN.match(collection.name or ""):
        errors.append(f"invalid collection name '{collection.name}'")

    seen_ids = set()
    seen_names = set()
    first_bad_field = None
    for f in collection.fields:
        field_errors = _field_errors(f)
        if f.id in seen_ids:
            field_errors.append(f"duplicate field id '{f.id}'")
        if f.name.lower() in seen_names:
            field_errors.append(f"duplicate field name '{f.name}'")
        seen_ids.add(f.id)
        seen_names.add(f.name.lower())

        if field_errors and first_bad_field is None:
            first_bad_field = f.name
        errors.extend(field_errors)

    if errors:
        raise SchemaValidationError(
            f"Collection '{collection.name}' failed validation: {'; '.join(errors)}",
            field=first_bad_field,
            errors=errors,
        )
