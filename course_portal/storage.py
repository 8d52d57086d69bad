"""Key-value storage backing the portal state.

Every client owns a namespace holding JSON-encoded strings under the keys
below, the same layout a browser keeps in its local storage. Workflows only
see the ``KeyValueStore`` interface.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from course_portal.errors import StorageUnavailable

logger = logging.getLogger(__name__)

USERS_KEY = "users"
CURRENT_USER_KEY = "currentUser"
ACCESS_CODES_KEY = "accessCodes"
SELECTED_COURSE_KEY = "selectedCourse"

# In-memory namespaces used when MongoDB is disabled, keyed by client id.
local_stores: Dict[str, Dict[str, str]] = {}


class KeyValueStore:
    """String key-value store scoped to one client namespace."""

    def __init__(self, namespace: str = "default"):
        self.namespace = namespace

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """Store kept in process memory; lost on restart."""

    def __init__(self, namespace: str = "default", backing: Optional[Dict[str, Dict[str, str]]] = None):
        super().__init__(namespace)
        self._backing = local_stores if backing is None else backing

    def get(self, key: str) -> Optional[str]:
        return self._backing.get(self.namespace, {}).get(key)

    def set(self, key: str, value: str) -> None:
        self._backing.setdefault(self.namespace, {})[key] = value

    def remove(self, key: str) -> None:
        self._backing.get(self.namespace, {}).pop(key, None)

    def clear(self) -> None:
        self._backing.pop(self.namespace, None)


class MongoStore(KeyValueStore):
    """Store persisted as one MongoDB document per (namespace, key)."""

    def __init__(self, collection: Collection, namespace: str = "default"):
        super().__init__(namespace)
        self.collection = collection

    def get(self, key: str) -> Optional[str]:
        try:
            document = self.collection.find_one({"namespace": self.namespace, "key": key})
        except PyMongoError as e:
            logger.error("Failed to read '%s' from MongoDB: %s", key, e)
            raise StorageUnavailable() from e
        return document["value"] if document else None

    def set(self, key: str, value: str) -> None:
        try:
            self.collection.update_one(
                {"namespace": self.namespace, "key": key},
                {"$set": {"value": value, "updated_at": datetime.utcnow()}},
                upsert=True,
            )
        except PyMongoError as e:
            logger.error("Failed to write '%s' to MongoDB: %s", key, e)
            raise StorageUnavailable() from e

    def remove(self, key: str) -> None:
        try:
            self.collection.delete_one({"namespace": self.namespace, "key": key})
        except PyMongoError as e:
            logger.error("Failed to remove '%s' from MongoDB: %s", key, e)
            raise StorageUnavailable() from e

    def clear(self) -> None:
        try:
            self.collection.delete_many({"namespace": self.namespace})
        except PyMongoError as e:
            logger.error("Failed to clear namespace '%s': %s", self.namespace, e)
            raise StorageUnavailable() from e


def read_json(store: KeyValueStore, key: str, default: Any = None) -> Any:
    """Decode the JSON value stored under ``key``, or return ``default`` if absent."""
    raw = store.get(key)
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except ValueError as e:
        logger.warning("Stored value for '%s' is not valid JSON", key)
        raise StorageUnavailable() from e


# Errors raised when decoded JSON does not fit a model record.
RECORD_ERRORS = (ValueError, KeyError, TypeError, AttributeError)


def write_json(store: KeyValueStore, key: str, value: Any) -> None:
    """Encode ``value`` as JSON and store it under ``key``."""
    store.set(key, json.dumps(value))


def reset_storage(collection: Collection, namespace: Optional[str] = None) -> int:
    """Delete one namespace, or every namespace, from the MongoDB collection."""
    query: Dict[str, Any] = {} if namespace is None else {"namespace": namespace}
    result = collection.delete_many(query)
    logger.info("Removed %d stored entries", result.deleted_count)
    return result.deleted_count
