"""Built-in schema operations for s3schema migrations."""

from dataclasses import dataclass
from typing import Any

from s3schema.core.exceptions import MigrationError, NotFoundError
from s3schema.migrations.base import MigrationOperation
from s3schema.schema.collection import Collection
from s3schema.schema.fields import SchemaField, parse_field


@dataclass
class AddField(MigrationOperation):
    """Insert a new field at a position in the collection's field list.

    Example:
        AddField(TextField(id="text724990059", name="title"), position=3)
    """

    field: SchemaField | dict[str, Any]
    position: int = -1

    def __post_init__(self):
        self.field = parse_field(self.field)

    def forward(self, collection: Collection) -> Collection:
        result = collection.copy_deep()
        result.fields.add_at(self.position, self.field.model_copy(deep=True))
        return result

    def reverse(self, collection: Collection) -> Collection:
        result = collection.copy_deep()
        result.fields.remove_by_id(self.field.id)
        return result


@dataclass
class RemoveField(MigrationOperation):
    """Remove a field by id.

    ``reverse`` re-inserts ``field`` at ``position``, so both must be given
    for the removal to be undone. A migration holding a RemoveField without
    them has to be declared ``reversible=False``.

    Example:
        RemoveField(
            "select3120095287",
            field={"id": "select3120095287", "name": "download_status", ...},
            position=10,
        )
    """

    field_id: str
    field: SchemaField | dict[str, Any] | None = None
    position: int = -1

    def __post_init__(self):
        if self.field is not None:
            self.field = parse_field(self.field)
            if self.field.id != self.field_id:
                raise MigrationError(
                    f"RemoveField({self.field_id!r}) was given the definition "
                    f"of field {self.field.id!r}"
                )

    @property
    def can_reverse(self) -> bool:
        return self.field is not None

    def forward(self, collection: Collection) -> Collection:
        result = collection.copy_deep()
        result.fields.remove_by_id(self.field_id)
        return result

    def reverse(self, collection: Collection) -> Collection:
        result = collection.copy_deep()
        if result.fields.get_by_id(self.field_id) is not None:
            return result
        if self.field is None:
            raise MigrationError(
                f"Cannot restore field {self.field_id} on {collection.name}: "
                "RemoveField has no field definition"
            )
        result.fields.add_at(self.position, self.field.model_copy(deep=True))
        return result


@dataclass
class RenameField(MigrationOperation):
    """Rename a field, keeping its id.

    Example:
        RenameField("text22648455", old_name="artist", new_name="performer")
    """

    field_id: str
    old_name: str
    new_name: str

    def forward(self, collection: Collection) -> Collection:
        result = collection.copy_deep()
        target = result.fields.get_by_id(self.field_id)
        if target is None:
            raise NotFoundError("Field", self.field_id)
        target.name = self.new_name
        return result

    def reverse(self, collection: Collection) -> Collection:
        result = collection.copy_deep()
        target = result.fields.get_by_id(self.field_id)
        if target is not None:
            target.name = self.old_name
        return result


@dataclass
class UpdateCollection(MigrationOperation):
    """Rename the collection itself.

    Example:
        UpdateCollection(old_name="tracks", name="songs")
    """

    old_name: str
    name: str

    def forward(self, collection: Collection) -> Collection:
        result = collection.copy_deep()
        result.name = self.name
        return result

    def reverse(self, collection: Collection) -> Collection:
        result = collection.copy_deep()
        result.name = self.old_name
        return result


def add_fields(*descriptors: dict[str, Any]) -> list[AddField]:
    """Build AddField operations from wire descriptors carrying a ``position`` key.

    Example:
        add_fields(
            {"id": "text724990059", "name": "title", "type": "text", "position": 3},
        )
    """
    operations = []
    for descriptor in descriptors:
        data = dict(descriptor)
        position = data.pop("position", -1)
        operations.append(AddField(field=data, position=position))
    return operations
