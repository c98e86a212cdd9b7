"""Track the download state of each track."""

from s3schema.migrations import Migration, add_fields
from s3schema.tracks import TRACKS_COLLECTION_ID

migration = Migration(
    version="1765112355",
    description="Add download_status to tracks",
    collection=TRACKS_COLLECTION_ID,
    operations=add_fields(
        {
            "hidden": False,
            "id": "select3120095287",
            "maxSelect": 1,
            "name": "download_status",
            "presentable": False,
            "required": False,
            "system": False,
            "type": "select",
            "values": ["queued", "downloading", "completed", "failed"],
            "position": 10,
        },
    ),
)
