# marker_config.py
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv() # Load variables from .env file

MONGO_URI = os.getenv("MONGO_URI")
DB_NAME = os.getenv("DB_NAME", "Kerberos")
TIMEOUT_SECONDS = float(os.getenv("MARKER_TIMEOUT_SECONDS", "10"))


@dataclass(frozen=True)
class MarkerStoreConfig:
    """
    Where the marker pipeline writes, and how long a single create may take.
    Every name can be overridden, e.g. to point tests at an isolated namespace.
    """
    database_name: str = DB_NAME
    timeout: float = TIMEOUT_SECONDS
    markers_collection: str = "markers"
    marker_options_collection: str = "marker_options"
    marker_option_ranges_collection: str = "marker_option_ranges"
    tag_options_collection: str = "marker_tag_options"
    tag_option_ranges_collection: str = "marker_tag_option_ranges"
    event_options_collection: str = "marker_event_options"
    event_option_ranges_collection: str = "marker_event_option_ranges"
    category_options_collection: str = "marker_category_options"
    media_collection: str = "media"


def load_config(**overrides) -> MarkerStoreConfig:
    """Builds the config from the environment, applying any keyword overrides."""
    return MarkerStoreConfig(**overrides)


def require_mongo_uri() -> str:
    if not MONGO_URI:
        raise ValueError("MONGO_URI not found in environment variables. Please create a .env file.")
    return MONGO_URI
