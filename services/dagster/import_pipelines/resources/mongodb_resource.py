"""MongoDB Resource - Import job snapshot store."""

from __future__ import annotations

from functools import cached_property
from typing import ClassVar

from dagster import ConfigurableResource
from pydantic import Field
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from datastore.storage import MongoJobStore

__all__ = ["MongoDBResource"]


class MongoDBResource(ConfigurableResource):
    """
    Dagster resource for persistent import job snapshots.

    Successive op attempts load the same job from here, which is what lets
    an import continue where the previous time slice stopped.
    """

    connection_string: str = Field(..., description="MongoDB connection URI")
    database: str = Field("datastore", description="MongoDB database name")

    IMPORT_JOBS: ClassVar[str] = "import_jobs"

    @cached_property
    def _client(self) -> MongoClient:
        return MongoClient(self.connection_string)

    def _get_db(self) -> Database:
        return self._client[self.database]

    def _get_collection(self, name: str) -> Collection:
        return self._get_db()[name]

    def job_store(self) -> MongoJobStore:
        """
        Return the job store on the ``import_jobs`` collection.

        Ensures the unique ``identifier`` index exists.
        """
        store = MongoJobStore(self._get_collection(self.IMPORT_JOBS))
        store.ensure_indexes()
        return store
