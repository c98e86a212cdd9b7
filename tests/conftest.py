"""Shared fixtures for s3schema tests."""

import pytest

from s3schema.schema import Collection, FileField, TextField

pytest_plugins = ["s3schema.testing.fixtures"]


@pytest.fixture
def tracks_base() -> Collection:
    """A tracks collection with three fields and none of the metadata fields."""
    return Collection(
        id="pbc_327047008",
        name="tracks",
        fields=[
            TextField(id="text3208210256", name="id", primary_key=True, system=True),
            TextField(id="text1513307582", name="spotify_track_id", required=True),
            FileField(id="file2359244304", name="file"),
        ],
    )
