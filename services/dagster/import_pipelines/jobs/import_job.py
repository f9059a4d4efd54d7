"""Datastore import job for CSV resources."""

from dagster import job

from ..ops.import_ops import run_import_slice


@job(
    name="datastore_import_job",
    description="Import a CSV resource into its datastore table. Runs in time slices and resumes from the job snapshot stored in MongoDB.",
)
def datastore_import_job():
    """
    Datastore import pipeline.

    Flow:
    1. Load (or create) the import job for the requested resource
    2. Import rows until the time budget is spent, then retry the op
    3. Finish when the input is exhausted, fail if the import errors
    """
    # import_request comes from run_config
    run_import_slice()
