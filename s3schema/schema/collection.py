"""Collections and their ordered field lists."""

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

from s3schema.core.exceptions import ConflictError, SchemaValidationError
from s3schema.schema.fields import SchemaField, parse_field


class FieldList:
    """Ordered list of fields with unique ids.

    Order matters for display only; fields are identified by id.
    """

    def __init__(self, fields: Iterable[SchemaField | dict] = ()):
        self._fields: list[SchemaField] = []
        for f in fields:
            self.add_at(len(self._fields), parse_field(f))

    def __iter__(self) -> Iterator[SchemaField]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __getitem__(self, index: int) -> SchemaField:
        return self._fields[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldList):
            return self._fields == other._fields
        if isinstance(other, list):
            return self._fields == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"FieldList({[f.name for f in self._fields]!r})"

    def add_at(self, position: int, new_field: SchemaField) -> None:
        """Insert a field at the given index.

        Negative positions and positions past the end append.

        Raises:
            ConflictError: If a field with the same id already exists
        """
        if self.get_by_id(new_field.id) is not None:
            raise ConflictError(
                f"Field '{new_field.id}' ({new_field.name}) already exists",
                field_id=new_field.id,
            )
        if position < 0 or position > len(self._fields):
            position = len(self._fields)
        self._fields.insert(position, new_field)

    def remove_by_id(self, field_id: str) -> SchemaField | None:
        """Remove a field by id. Returns the removed field, or None if absent."""
        index = self.index_of(field_id)
        if index is None:
            return None
        return self._fields.pop(index)

    def get_by_id(self, field_id: str) -> SchemaField | None:
        for f in self._fields:
            if f.id == field_id:
                return f
        return None

    def get_by_name(self, name: str) -> SchemaField | None:
        for f in self._fields:
            if f.name == name:
                return f
        return None

    def index_of(self, field_id: str) -> int | None:
        for i, f in enumerate(self._fields):
            if f.id == field_id:
                return i
        return None

    def ids(self) -> list[str]:
        return [f.id for f in self._fields]

    def names(self) -> list[str]:
        return [f.name for f in self._fields]

    def to_list(self) -> list[dict[str, Any]]:
        return [f.to_dict() for f in self._fields]


@dataclass
class Collection:
    """A named schema definition for a category of records.

    Attributes:
        id: Stable identifier, never changes once assigned
        name: Human name, may be renamed
        type: Collection kind ("base", "auth", "view")
        fields: Ordered field definitions
        options: Other keys of the definition (rules, indexes, ...) kept verbatim
    """

    id: str
    name: str
    type: str = "base"
    fields: FieldList = field(default_factory=FieldList)
    options: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.fields, FieldList):
            self.fields = FieldList(self.fields)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "id" and "id" in self.__dict__ and value != self.__dict__["id"]:
            raise AttributeError("Collection id cannot be changed")
        super().__setattr__(name, value)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            **self.options,
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "fields": self.fields.to_list(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Collection":
        """Create from dictionary.

        Raises:
            SchemaValidationError: If the definition is malformed
        """
        try:
            collection_id = data["id"]
            name = data["name"]
        except KeyError as e:
            raise SchemaValidationError(
                f"Collection definition is missing '{e.args[0]}'"
            ) from e

        options = {
            k: v for k, v in data.items()
            if k not in ("id", "name", "type", "fields")
        }
        return cls(
            id=collection_id,
            name=name,
            type=data.get("type", "base"),
            fields=FieldList(data.get("fields", [])),
            options=options,
        )

    def copy_deep(self) -> "Collection":
        """Return an independent copy of this collection."""
        return Collection.from_dict(self.to_dict())
