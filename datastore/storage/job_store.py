# =============================================================================
# Job Stores
# =============================================================================
# Persistent snapshots of import jobs keyed by job identifier:
# - MemoryJobStore: process-local dict (tests, single invocations)
# - MongoJobStore: MongoDB collection shared by successive invocations
# =============================================================================

import copy
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pymongo import ASCENDING
from pymongo.collection import Collection

from ..contracts import JobStoreInterface

__all__ = ["MemoryJobStore", "MongoJobStore"]


class MemoryJobStore(JobStoreInterface):
    """Job store kept in a dict; snapshots are deep-copied in and out."""

    def __init__(self):
        self._snapshots: Dict[str, Dict[str, Any]] = {}

    def retrieve(self, identifier: str) -> Optional[Dict[str, Any]]:
        snapshot = self._snapshots.get(identifier)
        return copy.deepcopy(snapshot) if snapshot is not None else None

    def store(self, identifier: str, snapshot: Dict[str, Any]) -> None:
        self._snapshots[identifier] = copy.deepcopy(snapshot)

    def remove(self, identifier: str) -> None:
        self._snapshots.pop(identifier, None)

    def __len__(self) -> int:
        return len(self._snapshots)


class MongoJobStore(JobStoreInterface):
    """
    Job store backed by a MongoDB collection.

    One document per job: ``{identifier, snapshot, updated_at}``.
    """

    def __init__(self, collection: Collection):
        self.collection = collection

    def ensure_indexes(self) -> None:
        self.collection.create_index([("identifier", ASCENDING)], unique=True)

    def retrieve(self, identifier: str) -> Optional[Dict[str, Any]]:
        document = self.collection.find_one({"identifier": identifier})
        if not document:
            return None
        return document["snapshot"]

    def store(self, identifier: str, snapshot: Dict[str, Any]) -> None:
        self.collection.replace_one(
            {"identifier": identifier},
            {
                "identifier": identifier,
                "snapshot": snapshot,
                "updated_at": datetime.now(timezone.utc),
            },
            upsert=True,
        )

    def remove(self, identifier: str) -> None:
        self.collection.delete_one({"identifier": identifier})
