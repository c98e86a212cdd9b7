"""Add track metadata fields: title, artist, album and duration."""

from s3schema.migrations import Migration, add_fields
from s3schema.tracks import TRACKS_COLLECTION_ID

migration = Migration(
    version="1764960748",
    description="Add title, artist, album and duration to tracks",
    collection=TRACKS_COLLECTION_ID,
    operations=add_fields(
        {
            "autogeneratePattern": "",
            "hidden": False,
            "id": "text724990059",
            "max": 0,
            "min": 0,
            "name": "title",
            "pattern": "",
            "presentable": False,
            "primaryKey": False,
            "required": False,
            "system": False,
            "type": "text",
            "position": 3,
        },
        {
            "autogeneratePattern": "",
            "hidden": False,
            "id": "text22648455",
            "max": 0,
            "min": 0,
            "name": "artist",
            "pattern": "",
            "presentable": False,
            "primaryKey": False,
            "required": False,
            "system": False,
            "type": "text",
            "position": 4,
        },
        {
            "autogeneratePattern": "",
            "hidden": False,
            "id": "text966291011",
            "max": 0,
            "min": 0,
            "name": "album",
            "pattern": "",
            "presentable": False,
            "primaryKey": False,
            "required": False,
            "system": False,
            "type": "text",
            "position": 5,
        },
        {
            "hidden": False,
            "id": "number2254405824",
            "max": None,
            "min": None,
            "name": "duration",
            "onlyInt": False,
            "presentable": False,
            "required": False,
            "system": False,
            "type": "number",
            "position": 6,
        },
    ),
)
