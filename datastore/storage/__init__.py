"""Row storage backends and job stores for datastore imports."""

from .database_table import RECORD_NUMBER_COLUMN, SqlDatabaseTable
from .job_store import MemoryJobStore, MongoJobStore
from .memory import MemoryDatabaseTable

__all__ = [
    "RECORD_NUMBER_COLUMN",
    "MemoryDatabaseTable",
    "MemoryJobStore",
    "MongoJobStore",
    "SqlDatabaseTable",
]
