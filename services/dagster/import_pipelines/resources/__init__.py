"""Dagster Resources - External Service Connections."""

from .database_resource import DatastoreDatabaseResource
from .mongodb_resource import MongoDBResource

__all__ = [
    "DatastoreDatabaseResource",
    "MongoDBResource",
]
