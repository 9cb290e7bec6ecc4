# marker_db_schemas.py

# Note: While MongoDB is schemaless, this file defines the intended structure
# for the marker collections, and the indexes the setup script creates.

MARKERS_SCHEMA = {
    "_id": "ObjectId",
    "name": "string (e.g., 'Person Detected')", # INDEXED
    "startTimestamp": "int (unix seconds)",
    "endTimestamp": "int (unix seconds)",
    "duration": "int (endTimestamp - startTimestamp, may be negative)",
    "organisationId": "string", # INDEXED (compound with startTimestamp)
    "deviceId": "string",
    "groupId": "string",
    "tags": "array[{name: string, ...}]",
    "events": "array[{name: string, startTimestamp: int, endTimestamp: int, ...}]",
    "categories": "array[{name: string, ...}]",
    "description": "string (optional)",
    "metadata": "object (optional)"
}

# Shared by marker_options, marker_tag_options, marker_event_options, marker_category_options
OPTION_SCHEMA = {
    "_id": "ObjectId",
    "value": "string", # UNIQUE together with organisationId
    "text": "string (same as value)",
    "organisationId": "string",
    "createdAt": "int (unix seconds, set on insert only)",
    "updatedAt": "int (unix seconds, set on every occurrence)",
    "categories": "array[string] (marker_options only, set semantics)"
}

# Shared by marker_option_ranges, marker_tag_option_ranges, marker_event_option_ranges
OPTION_RANGE_SCHEMA = {
    "_id": "ObjectId",
    "value": "string",
    "text": "string",
    "organisationId": "string", # INDEXED (compound with start, end)
    "start": "int (unix seconds)",
    "end": "int (unix seconds)",
    "deviceId": "string",
    "groupId": "string",
    "createdAt": "int (unix seconds)",
    "updatedAt": "int (unix seconds, event ranges only)"
}

# Owned by the media service; the marker pipeline only adds to the name sets.
MEDIA_SCHEMA = {
    "_id": "ObjectId",
    "startTimestamp": "int (unix seconds)",
    "endTimestamp": "int (unix seconds)",
    "markerNames": "array[string] (set semantics)",
    "tagNames": "array[string] (set semantics)",
    "eventNames": "array[string] (set semantics)"
}

_OPTION_INDEXES = [
    {"keys": {"value": 1, "organisationId": 1}, "options": {"unique": True, "name": "value_organisation_unique"}},
]

_RANGE_INDEXES = [
    {"keys": {"organisationId": 1, "start": 1, "end": 1}, "options": {"name": "organisation_start_end"}},
    {"keys": {"organisationId": 1, "value": 1}, "options": {"name": "organisation_value"}},
]


def collection_indexes(config):
    """Maps each configured collection name to the index specs it needs."""
    return {
        config.markers_collection: [
            {"keys": {"organisationId": 1, "startTimestamp": -1}, "options": {"name": "organisation_start"}},
            {"keys": {"name": 1}, "options": {"name": "name"}},
        ],
        config.marker_options_collection: _OPTION_INDEXES,
        config.tag_options_collection: _OPTION_INDEXES,
        config.event_options_collection: _OPTION_INDEXES,
        config.category_options_collection: _OPTION_INDEXES,
        config.marker_option_ranges_collection: _RANGE_INDEXES,
        config.tag_option_ranges_collection: _RANGE_INDEXES,
        config.event_option_ranges_collection: _RANGE_INDEXES,
    }
