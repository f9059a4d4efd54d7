"""Dagster Definitions - Repository Configuration.

Defines the job and resources for the datastore import pipeline.
"""

from dagster import Definitions, EnvVar

from .jobs import datastore_import_job
from .resources import DatastoreDatabaseResource, MongoDBResource


# =============================================================================
# Definitions
# =============================================================================

defs = Definitions(
    jobs=[datastore_import_job],
    resources={
        "datastore_db": DatastoreDatabaseResource(
            host=EnvVar("POSTGRES_HOST"),
            user=EnvVar("POSTGRES_USER"),
            password=EnvVar("POSTGRES_PASSWORD"),
            port=5432,
            database="datastore",
        ),
        "mongodb": MongoDBResource(
            connection_string=EnvVar("MONGO_CONNECTION_STRING"),
            database="datastore",
        ),
    },
    schedules=[],
    sensors=[],
)
