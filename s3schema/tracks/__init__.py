"""Schema for the ``tracks`` collection and the migrations that evolve it."""

from pathlib import Path

from s3schema.schema.collection import Collection
from s3schema.schema.fields import AutodateField, FileField, TextField

TRACKS_COLLECTION_ID = "pbc_327047008"
TRACKS_COLLECTION_NAME = "tracks"

MIGRATIONS_DIR = Path(__file__).parent / "migrations"


def tracks_collection() -> Collection:
    """The base ``tracks`` definition the shipped migrations build on."""
    return Collection(
        id=TRACKS_COLLECTION_ID,
        name=TRACKS_COLLECTION_NAME,
        fields=[
            TextField(
                id="text3208210256",
                name="id",
                min=15,
                max=15,
                pattern="^[a-z0-9]+$",
                autogenerate_pattern="[a-z0-9]{15}",
                primary_key=True,
                required=True,
                system=True,
            ),
            TextField(id="text1513307582", name="spotify_track_id", required=True),
            FileField(id="file2359244304", name="file", max_select=1),
            AutodateField(id="autodate2990389176", name="created", on_create=True),
            AutodateField(
                id="autodate3332085495", name="updated", on_create=True, on_update=True
            ),
        ],
    )
