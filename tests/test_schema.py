"""Tests for schema models."""

import pytest

from s3schema.core.exceptions import ConflictError, SchemaValidationError
from s3schema.schema import (
    AutodateField,
    BoolField,
    Collection,
    FieldList,
    FileField,
    NumberField,
    SelectField,
    TextField,
    parse_field,
)


class TestParseField:
    """Tests for parse_field."""

    def test_parse_text_field(self):
        """Test parsing a camelCase text descriptor."""
        f = parse_field({
            "id": "text724990059",
            "name": "title",
            "type": "text",
            "autogeneratePattern": "",
            "primaryKey": False,
            "max": 0,
        })

        assert isinstance(f, TextField)
        assert f.name == "title"
        assert f.autogenerate_pattern == ""
        assert f.required is False

    def test_parse_number_field(self):
        """Test parsing a number descriptor with null bounds."""
        f = parse_field({
            "id": "number2254405824",
            "name": "duration",
            "type": "number",
            "min": None,
            "max": None,
            "onlyInt": False,
        })

        assert isinstance(f, NumberField)
        assert f.min is None
        assert f.only_int is False

    def test_parse_select_field(self):
        """Test parsing a select descriptor."""
        f = parse_field({
            "id": "select3120095287",
            "name": "download_status",
            "type": "select",
            "values": ["queued", "failed"],
            "maxSelect": 1,
        })

        assert isinstance(f, SelectField)
        assert f.values == ["queued", "failed"]
        assert f.max_select == 1

    def test_parse_file_field(self):
        """Test parsing a file descriptor keeps its upload options."""
        data = {
            "id": "file2359244304",
            "name": "file",
            "type": "file",
            "maxSelect": 1,
            "maxSize": 52428800,
            "mimeTypes": ["audio/mpeg"],
            "thumbs": [],
            "protected": False,
            "hidden": False,
            "presentable": False,
            "required": False,
            "system": False,
        }

        f = parse_field(data)

        assert isinstance(f, FileField)
        assert f.max_size == 52428800
        assert f.mime_types == ["audio/mpeg"]
        assert f.to_dict() == data

    def test_parse_autodate_field(self):
        data = {
            "id": "autodate3332085495",
            "name": "updated",
            "type": "autodate",
            "onCreate": True,
            "onUpdate": True,
            "hidden": False,
            "presentable": False,
            "system": False,
        }

        f = parse_field(data)

        assert isinstance(f, AutodateField)
        assert f.on_update is True
        assert f.to_dict() == {**data, "required": False}

    def test_number_bounds_keep_integers(self):
        """Test integer bounds are not rewritten as floats."""
        f = parse_field({"id": "n1", "name": "rating", "type": "number", "min": 1, "max": 10})

        dumped = f.to_dict()

        assert dumped["min"] == 1 and isinstance(dumped["min"], int)
        assert dumped["max"] == 10 and isinstance(dumped["max"], int)
        assert parse_field({"id": "n2", "name": "gain", "type": "number", "min": 0.5}).min == 0.5

    def test_unknown_type(self):
        """Test an unknown field type is rejected."""
        with pytest.raises(SchemaValidationError) as exc_info:
            parse_field({"id": "x1", "name": "x", "type": "geo"})

        assert "geo" in str(exc_info.value)

    def test_missing_id(self):
        """Test a descriptor without id is rejected."""
        with pytest.raises(SchemaValidationError):
            parse_field({"name": "title", "type": "text"})

    def test_dump_uses_wire_names(self):
        """Test fields dump back to camelCase keys."""
        f = NumberField(id="n1", name="duration", only_int=True)

        data = f.to_dict()

        assert data["onlyInt"] is True
        assert data["type"] == "number"
        assert "only_int" not in data

    def test_unknown_keys_pass_through(self):
        """Test extra constraint keys survive a round trip."""
        f = parse_field({"id": "t1", "name": "slug", "type": "text", "customOption": 5})

        assert f.to_dict()["customOption"] == 5

    def test_id_is_immutable(self):
        """Test a field id cannot be reassigned."""
        f = BoolField(id="bool1", name="explicit")

        with pytest.raises(Exception):
            f.id = "bool2"

    def test_rename(self):
        """Test a field name can be changed."""
        f = BoolField(id="bool1", name="explicit")

        f.name = "is_explicit"

        assert f.name == "is_explicit"
        assert f.id == "bool1"


class TestFieldList:
    """Tests for FieldList."""

    def make_list(self):
        return FieldList([
            TextField(id="a", name="alpha"),
            TextField(id="b", name="beta"),
            TextField(id="c", name="gamma"),
        ])

    def test_add_at_middle(self):
        """Test inserting shifts later fields."""
        fields = self.make_list()

        fields.add_at(1, BoolField(id="x", name="inserted"))

        assert fields.ids() == ["a", "x", "b", "c"]

    def test_add_at_past_end_appends(self):
        """Test positions past the end append."""
        fields = self.make_list()

        fields.add_at(10, BoolField(id="x", name="inserted"))

        assert fields.ids() == ["a", "b", "c", "x"]

    def test_add_at_negative_appends(self):
        fields = self.make_list()

        fields.add_at(-5, BoolField(id="x", name="inserted"))

        assert fields.ids() == ["a", "b", "c", "x"]

    def test_add_duplicate_id(self):
        """Test adding an existing id raises ConflictError."""
        fields = self.make_list()

        with pytest.raises(ConflictError) as exc_info:
            fields.add_at(0, BoolField(id="b", name="other"))

        assert exc_info.value.field_id == "b"
        assert len(fields) == 3

    def test_duplicate_ids_in_constructor(self):
        with pytest.raises(ConflictError):
            FieldList([TextField(id="a", name="one"), TextField(id="a", name="two")])

    def test_remove_by_id(self):
        """Test removing returns the field."""
        fields = self.make_list()

        removed = fields.remove_by_id("b")

        assert removed.name == "beta"
        assert fields.ids() == ["a", "c"]

    def test_remove_missing_is_noop(self):
        """Test removing an unknown id does nothing."""
        fields = self.make_list()

        assert fields.remove_by_id("zzz") is None
        assert fields.ids() == ["a", "b", "c"]

    def test_lookups(self):
        fields = self.make_list()

        assert fields.get_by_name("gamma").id == "c"
        assert fields.get_by_id("a").name == "alpha"
        assert fields.index_of("c") == 2
        assert fields.index_of("zzz") is None
        assert fields[1].name == "beta"


class TestCollection:
    """Tests for Collection."""

    def test_from_dict_keeps_options(self):
        """Test unknown collection keys are preserved."""
        data = {
            "id": "pbc_1",
            "name": "tracks",
            "type": "base",
            "listRule": "",
            "fields": [{"id": "t1", "name": "title", "type": "text"}],
        }

        collection = Collection.from_dict(data)

        assert collection.options == {"listRule": ""}
        assert collection.fields.names() == ["title"]
        assert collection.to_dict()["listRule"] == ""

    def test_from_dict_missing_name(self):
        with pytest.raises(SchemaValidationError):
            Collection.from_dict({"id": "pbc_1"})

    def test_copy_is_independent(self, tracks_base):
        """Test mutating a copy leaves the original alone."""
        copy = tracks_base.copy_deep()

        copy.fields.add_at(0, BoolField(id="b1", name="flag"))
        copy.fields[1].name = "renamed"

        assert len(tracks_base.fields) == 3
        assert tracks_base.fields[0].name == "id"
        assert copy != tracks_base

    def test_copy_is_equal(self, tracks_base):
        assert tracks_base.copy_deep() == tracks_base

    def test_id_is_immutable(self, tracks_base):
        """Test the collection id cannot change."""
        with pytest.raises(AttributeError):
            tracks_base.id = "pbc_other"

    def test_name_is_mutable(self, tracks_base):
        tracks_base.name = "songs"

        assert tracks_base.name == "songs"
