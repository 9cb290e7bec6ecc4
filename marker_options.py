# marker_options.py
"""
Builders for the denormalized option catalogs and option ranges.

Catalogs hold one entry per distinct (value, organisationId) and are written
with upserts, so a label seen again only refreshes `updatedAt`. Ranges are an
append-only log with one record per occurrence, repeats included.
"""
from pymongo import UpdateOne

from marker_models import distinct


def option_upserts(names, organisation_id, now, categories=None):
    """
    One upsert per distinct non-empty name. When `categories` is given (marker
    name options only) the names are merged into the option's category set.
    """
    requests = []
    for name in distinct(names):
        update = {
            "$setOnInsert": {
                "value": name,
                "text": name,
                "organisationId": organisation_id,
                "createdAt": now,
            },
            "$set": {
                "updatedAt": now,
            },
        }
        if categories is not None:
            update["$addToSet"] = {"categories": {"$each": distinct(categories)}}
        requests.append(UpdateOne({"value": name, "organisationId": organisation_id}, update, upsert=True))
    return requests


def range_document(value, marker, start, end, now):
    return {
        "value": value,
        "text": value,
        "organisationId": marker.organisation_id,
        "start": start,
        "end": end,
        "deviceId": marker.device_id,
        "groupId": marker.group_id,
        "createdAt": now,
    }


def marker_option_upserts(marker, now):
    return option_upserts([marker.name], marker.organisation_id, now, categories=marker.category_names())


def marker_ranges(marker, now):
    if not marker.name:
        return []
    return [range_document(marker.name, marker, marker.start_timestamp, marker.end_timestamp, now)]


def tag_option_upserts(marker, now):
    return option_upserts(marker.tag_names(), marker.organisation_id, now)


def tag_ranges(marker, now):
    # Tags have no span of their own, they share the marker's.
    return [
        range_document(name, marker, marker.start_timestamp, marker.end_timestamp, now)
        for name in marker.tag_names()
    ]


def event_option_upserts(marker, now):
    return option_upserts(marker.event_names(), marker.organisation_id, now)


def event_ranges(marker, now):
    docs = []
    for event in marker.events:
        if not event.name:
            continue
        doc = range_document(event.name, marker, event.start_timestamp, event.end_timestamp, now)
        doc["updatedAt"] = now
        docs.append(doc)
    return docs


def category_option_upserts(marker, now):
    return option_upserts(marker.category_names(), marker.organisation_id, now)
