# marker_db_setup.py

from pymongo import MongoClient, ASCENDING, DESCENDING
from pymongo.errors import CollectionInvalid, PyMongoError

from marker_config import load_config, require_mongo_uri
from marker_db_schemas import collection_indexes


def _index_keys(keys: dict):
    return [(field, DESCENDING if direction == -1 else ASCENDING) for field, direction in keys.items()]


def _ensure_indexes(collection, x_indexes: list):
    created = []
    for spec in x_indexes or []:
        keys = spec.get("keys")
        options = spec.get("options", {})
        if not keys or not isinstance(keys, dict):
            # Unexpected format; skip
            continue
        try:
            created.append(collection.create_index(_index_keys(keys), **options))
        except PyMongoError as e:
            print(f"  - WARNING: Failed to create index {keys} on {collection.name}: {e}")
    return created


def _ensure_collection(db, name: str):
    if name in db.list_collection_names():
        return False
    print(f"Creating collection '{name}'...")
    try:
        db.create_collection(name)
    except CollectionInvalid:
        # Race: another process created it first
        return False
    return True


def setup_database(db, config=None):
    """
    Creates the marker collections and the indexes the pipeline relies on.
    The unique (value, organisationId) index on each option catalog is what
    makes concurrent upserts of the same label converge on one entry.
    Returns a mapping of collection name to the index names ensured.
    """
    config = config or load_config()
    ensured = {}
    for name, indexes in collection_indexes(config).items():
        _ensure_collection(db, name)
        ensured[name] = _ensure_indexes(db[name], indexes)
        print(f"  - Applied indexes for {name}")
    return ensured


def main():
    config = load_config()
    print("Connecting to MongoDB...")
    client = MongoClient(require_mongo_uri())
    try:
        db = client[config.database_name]
        print(f"Connected to database: '{config.database_name}'")
        setup_database(db, config)
    finally:
        client.close()
    print("\nDatabase setup complete. Collections and indexes are ready.")


if __name__ == "__main__":
    main()
