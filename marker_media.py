# marker_media.py
from bson import ObjectId
from bson.errors import InvalidId

from marker_errors import InvalidReferenceError
from marker_models import distinct


def parse_media_id(media_id):
    try:
        return ObjectId(media_id)
    except (InvalidId, TypeError) as e:
        raise InvalidReferenceError(media_id, e) from e


def media_names(marker):
    """The set fields added to a media document, keyed by field name."""
    return {
        "markerNames": distinct([marker.name]),
        "tagNames": distinct(marker.tag_names()),
        "eventNames": distinct(marker.event_names()),
    }


def link_media(database, marker, media_ids):
    """
    Adds the marker's names to each referenced media document whose time
    range contains the marker start. Empty ids are ignored. Stops at the
    first malformed id or failing update.
    Returns the number of media documents modified.
    """
    names = media_names(marker)
    modified = 0
    for media_id in media_ids:
        if not media_id:
            continue
        object_id = parse_media_id(media_id)
        if not any(names.values()):
            continue
        result = database.add_names_to_media(object_id, marker.start_timestamp, names)
        if result is not None:
            modified += result.modified_count
    return modified
