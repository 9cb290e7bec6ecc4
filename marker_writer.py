# marker_writer.py
"""
Marker ingestion.

`MarkerWriter.create` stores a marker and then keeps the denormalized
collections in step with it, in this order:

    insert marker
    upsert marker options -> insert marker ranges
    upsert tag options    -> insert tag ranges
    upsert event options  -> insert event ranges
    upsert category options
    update media

Every step is an independent write. There is no transaction and no rollback:
the first failing step raises, and whatever was already written stays. The
raised error carries the stored marker in `error.marker`.
"""
import copy
import logging
import time
from contextlib import contextmanager

import pymongo
from bson import ObjectId
from opentelemetry import trace
from pymongo.errors import PyMongoError

import marker_options
from marker_config import load_config
from marker_errors import DeadlineExceededError, MarkerError, StorageError, ValidationError
from marker_media import link_media

logger = logging.getLogger(__name__)


def validate_marker(marker):
    # A marker is identified by its name, everything else is taken as given.
    if marker is None or not marker.name:
        raise ValidationError("marker name is required", missing_fields=["name"])


@contextmanager
def _stage(name, marker=None, label=None):
    try:
        yield
    except PyMongoError as e:
        logger.error("[MarkerWriter] Failed to %s for marker %s: %s", name, marker.id if marker else label, e)
        if e.timeout:
            raise DeadlineExceededError(name, e, marker=marker) from e
        raise StorageError(name, e, marker=marker) from e
    except MarkerError as e:
        if e.marker is None:
            e.marker = marker
        raise


class MarkerWriter:

    def __init__(self, database, config=None, tracer=None, clock=time.time):
        self.database = database
        self.config = config or getattr(database, "config", None) or load_config()
        self.tracer = tracer or trace.get_tracer(__name__)
        self.clock = clock

    def create(self, marker, *media_ids, timeout=None):
        """
        Validates and stores a copy of `marker`, then updates the option
        catalogs, option ranges and the referenced media documents. The
        caller's object is left untouched; the stored copy is returned.

        `timeout` (seconds) bounds the whole call and defaults to the
        configured timeout. An enclosing `pymongo.timeout` block with a
        tighter deadline still applies.
        """
        with self.tracer.start_as_current_span("markers.create") as span:
            validate_marker(marker)
            span.set_attribute("marker.name", marker.name)
            span.set_attribute("marker.organisation_id", str(marker.organisation_id))

            marker = copy.deepcopy(marker)
            marker.id = None
            marker.duration = marker.end_timestamp - marker.start_timestamp

            with pymongo.timeout(self.config.timeout if timeout is None else timeout):
                self._insert(marker)
                span.set_attribute("marker.id", str(marker.id))
                self._denormalize(marker, media_ids)
            return marker

    def _insert(self, marker):
        doc = {**marker.to_document(), "_id": ObjectId()}
        with _stage("insert marker", label=marker.name):
            inserted_id = self.database.insert_marker(doc)
        if not isinstance(inserted_id, ObjectId):
            raise StorageError("insert marker", f"inserted id is not an ObjectId: {inserted_id!r}")
        marker.id = inserted_id
        logger.info("[MarkerWriter] Stored marker %s (%s) for organisation %s.", marker.id, marker.name, marker.organisation_id)

    def _denormalize(self, marker, media_ids):
        db = self.database
        now = int(self.clock())

        steps = [
            ("upsert marker options", db.upsert_options, db.marker_options, marker_options.marker_option_upserts),
            ("insert marker ranges", db.insert_ranges, db.marker_option_ranges, marker_options.marker_ranges),
            ("upsert tag options", db.upsert_options, db.tag_options, marker_options.tag_option_upserts),
            ("insert tag ranges", db.insert_ranges, db.tag_option_ranges, marker_options.tag_ranges),
            ("upsert event options", db.upsert_options, db.event_options, marker_options.event_option_upserts),
            ("insert event ranges", db.insert_ranges, db.event_option_ranges, marker_options.event_ranges),
            ("upsert category options", db.upsert_options, db.category_options, marker_options.category_option_upserts),
        ]
        for name, write, collection, build in steps:
            batch = build(marker, now)
            if not batch:
                continue
            with _stage(name, marker):
                write(collection, batch)
            logger.debug("[MarkerWriter] %s: %d write(s) for marker %s.", name, len(batch), marker.id)

        with _stage("update media", marker):
            modified = link_media(db, marker, media_ids)
        if modified:
            logger.debug("[MarkerWriter] Linked marker %s to %d media document(s).", marker.id, modified)
