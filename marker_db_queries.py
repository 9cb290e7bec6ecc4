# marker_db_queries.py
from bson import ObjectId

from marker_config import load_config


class MarkerDatabase:
    """
    A class to handle the database writes of the marker pipeline.
    Each method is one primitive store operation; callers decide ordering
    and error handling.
    """
    def __init__(self, client, config=None):
        self.config = config or load_config()
        self.client = client
        self.db = self.client[self.config.database_name]
        self.markers = self.db[self.config.markers_collection]
        self.marker_options = self.db[self.config.marker_options_collection]
        self.marker_option_ranges = self.db[self.config.marker_option_ranges_collection]
        self.tag_options = self.db[self.config.tag_options_collection]
        self.tag_option_ranges = self.db[self.config.tag_option_ranges_collection]
        self.event_options = self.db[self.config.event_options_collection]
        self.event_option_ranges = self.db[self.config.event_option_ranges_collection]
        self.category_options = self.db[self.config.category_options_collection]
        self.media = self.db[self.config.media_collection]

    # --- Marker Queries ---
    def insert_marker(self, doc):
        """Inserts a marker document and returns the identity the store reports."""
        return self.markers.insert_one(doc).inserted_id

    # --- Option Catalog Queries ---
    def upsert_options(self, collection, requests):
        """Sends all upserts of one catalog as a single ordered batch."""
        if not requests:
            return None
        return collection.bulk_write(requests, ordered=True)

    # --- Range Queries ---
    def insert_ranges(self, collection, docs):
        if not docs:
            return None
        return collection.insert_many(docs, ordered=True)

    # --- Media Queries ---
    def add_names_to_media(self, media_id: ObjectId, start_timestamp, names_by_field: dict):
        """
        Adds names to the media document's set fields, but only when the
        media time range contains start_timestamp. No match is not an error.
        """
        update_doc = {field: {"$each": names} for field, names in names_by_field.items() if names}
        if not update_doc:
            return None
        return self.media.update_one(
            {
                "_id": media_id,
                "startTimestamp": {"$lte": start_timestamp},
                "endTimestamp": {"$gte": start_timestamp},
            },
            {"$addToSet": update_doc}
        )

