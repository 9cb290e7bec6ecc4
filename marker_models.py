# marker_models.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from bson import ObjectId


@dataclass
class Tag:
    name: str = ""
    attributes: Dict[str, Any] = field(default_factory=dict)

    def to_document(self):
        return {**self.attributes, "name": self.name}


@dataclass
class Category(Tag):
    pass


@dataclass
class Event:
    name: str = ""
    start_timestamp: int = 0
    end_timestamp: int = 0
    attributes: Dict[str, Any] = field(default_factory=dict)

    def to_document(self):
        return {
            **self.attributes,
            "name": self.name,
            "startTimestamp": self.start_timestamp,
            "endTimestamp": self.end_timestamp,
        }


@dataclass
class Marker:
    """
    A named, time-ranged annotation on a device stream.

    `id` and `duration` are filled in by the writer when the marker is
    persisted, on the copy it returns; the caller's object is not changed.
    """
    name: str = ""
    start_timestamp: int = 0
    end_timestamp: int = 0
    organisation_id: str = ""
    device_id: str = ""
    group_id: str = ""
    tags: List[Tag] = field(default_factory=list)
    events: List[Event] = field(default_factory=list)
    categories: List[Category] = field(default_factory=list)
    description: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)
    duration: int = 0
    id: Optional[ObjectId] = None

    def to_document(self):
        doc = {
            "name": self.name,
            "startTimestamp": self.start_timestamp,
            "endTimestamp": self.end_timestamp,
            "duration": self.duration,
            "organisationId": self.organisation_id,
            "deviceId": self.device_id,
            "groupId": self.group_id,
            "tags": [t.to_document() for t in self.tags],
            "events": [e.to_document() for e in self.events],
            "categories": [c.to_document() for c in self.categories],
            "description": self.description,
            "metadata": dict(self.metadata),
        }
        if self.id is not None:
            doc["_id"] = self.id
        return doc

    # --- Label helpers used by the denormalization stages ---

    def tag_names(self):
        return [t.name for t in self.tags if t.name]

    def event_names(self):
        return [e.name for e in self.events if e.name]

    def category_names(self):
        return [c.name for c in self.categories if c.name]


def distinct(names):
    """Drops empty and repeated names, keeping first-seen order."""
    seen = set()
    out = []
    for name in names:
        if not name or name in seen:
            continue
        seen.add(name)
        out.append(name)
    return out
