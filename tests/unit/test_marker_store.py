"""
Store-level tests for MarkerWriter.create against an in-memory MongoDB.

These check the documents that end up in the collections rather than the
requests sent, so upsert convergence and $addToSet set semantics are covered.
"""

import itertools

import mongomock
import pytest
from bson import ObjectId

from marker_db_queries import MarkerDatabase
from marker_writer import MarkerWriter


@pytest.fixture
def store(store_config):
    return MarkerDatabase(mongomock.MongoClient(), store_config)


@pytest.fixture
def ticking_writer(store, store_config):
    """Writer whose clock advances by 10 seconds per create."""
    ticks = itertools.count(1000, 10)
    return MarkerWriter(store, store_config, clock=lambda: next(ticks))


def _options(collection):
    return list(collection.find({}, {"_id": 0}))


# ==================== OPTION CATALOG TESTS ====================

@pytest.mark.unit
def test_same_name_twice_converges_on_one_option(ticking_writer, store, make_marker):
    """Second submission merges its categories into the existing entry."""
    ticking_writer.create(make_marker(categories=["a"]))
    ticking_writer.create(make_marker(categories=["b", "a"]))

    options = _options(store.marker_options)
    assert len(options) == 1
    option = options[0]
    assert (option["value"], option["text"], option["organisationId"]) == ("Motion", "Motion", "A")
    assert sorted(option["categories"]) == ["a", "b"]
    assert option["createdAt"] == 1000
    assert option["updatedAt"] == 1010
    assert store.markers.count_documents({}) == 2
    assert store.marker_option_ranges.count_documents({}) == 2


@pytest.mark.unit
def test_options_are_scoped_per_organisation(ticking_writer, store, make_marker):
    ticking_writer.create(make_marker(organisation_id="A"))
    ticking_writer.create(make_marker(organisation_id="B"))

    assert store.marker_options.count_documents({"value": "Motion"}) == 2


@pytest.mark.unit
def test_repeated_tag_stores_one_option_two_ranges(ticking_writer, store, make_marker):
    ticking_writer.create(make_marker(tags=["high-priority", "high-priority"], categories=["c"]))

    assert store.tag_options.count_documents({"value": "high-priority"}) == 1
    assert store.tag_option_ranges.count_documents({"value": "high-priority"}) == 2
    assert store.category_options.count_documents({"value": "c"}) == 1


# ==================== MEDIA LINKING TESTS ====================

@pytest.mark.unit
def test_media_containing_start_gets_names_once(ticking_writer, store, make_marker):
    media_id = store.media.insert_one({
        "startTimestamp": 90,
        "endTimestamp": 120,
        "tagNames": ["x"],
    }).inserted_id

    ticking_writer.create(
        make_marker(tags=["x", "x", "y"], events=[("door", 101, 102)]),
        str(media_id),
    )
    ticking_writer.create(make_marker(tags=["y"]), str(media_id))

    media = store.media.find_one({"_id": media_id})
    assert media["markerNames"] == ["Motion"]
    assert media["tagNames"] == ["x", "y"]
    assert media["eventNames"] == ["door"]


@pytest.mark.unit
def test_media_outside_range_is_unchanged(ticking_writer, store, make_marker):
    before = {"_id": ObjectId(), "startTimestamp": 200, "endTimestamp": 300}
    store.media.insert_one(dict(before))

    marker = ticking_writer.create(make_marker(tags=["x"]), str(before["_id"]))

    assert marker.id is not None
    assert store.media.find_one({"_id": before["_id"]}) == before
