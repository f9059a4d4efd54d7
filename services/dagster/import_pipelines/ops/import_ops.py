# =============================================================================
# Import Ops - Time-Sliced Datastore Import
# =============================================================================
# Runs one slice of a resumable CSV import. While input remains, the op asks
# Dagster to retry it; each attempt reloads the job snapshot from MongoDB and
# continues from the saved cursor.
# =============================================================================

from typing import Any, Dict

from dagster import Failure, In, MetadataValue, OpExecutionContext, Out, RetryRequested, op

from datastore.importer import ImportJob
from datastore.models import ImportRequest, ImportSettings, JobStatus

# Upper bound on slices per run; each slice is one op attempt
MAX_IMPORT_SLICES = 1000


def _run_import_slice(
    database,
    mongodb,
    import_request: Dict[str, Any],
    log,
    attempt: int = 0,
) -> Dict[str, Any]:
    """
    Core logic for running one import slice.

    This function is extracted for easier unit testing.

    Args:
        database: DatastoreDatabaseResource instance
        mongodb: MongoDBResource instance
        import_request: ImportRequest dict (validated here)
        log: Logger instance
        attempt: Op retry number; a reset request only drops the job on attempt 0

    Returns:
        Dict with identifier, table_name, status, error and rows
    """
    request = ImportRequest(**import_request)
    identifier = request.job_identifier

    table = database.table_for(request.resource)
    job = ImportJob.get(
        identifier,
        mongodb.job_store(),
        {"resource": request.resource, "storage": table},
        settings=ImportSettings(),
    )
    if request.reset and attempt == 0:
        log.info(f"Resetting import job {identifier} and table {table.table_name}")
        job.drop()
    if request.time_limit is not None and request.time_limit != job.get_time_limit():
        job.set_time_limit(request.time_limit)

    log.info(
        f"Running import slice for {identifier} into {table.table_name} "
        f"(time limit: {job.get_time_limit()})"
    )
    result = job.run()
    rows = job.get_cursor().rows_committed
    log.info(f"Import slice for {identifier} ended {result.status.value} with {rows} rows")

    return {
        "identifier": identifier,
        "table_name": table.table_name,
        "status": result.status.value,
        "error": result.error,
        "rows": rows,
    }


@op(
    ins={"import_request": In(dagster_type=dict)},
    out={"import_result": Out(dagster_type=dict)},
    required_resource_keys={"datastore_db", "mongodb"},
)
def run_import_slice(context: OpExecutionContext, import_request: dict) -> dict:
    """
    Import a resource into its datastore table, one time slice per attempt.

    Args:
        context: Dagster op execution context
        import_request: ImportRequest dict (from run_config)

    Returns:
        Dict with identifier, table_name, status, error and rows

    Raises:
        RetryRequested: While the import is in progress
        Failure: If the import ended in error
    """
    summary = _run_import_slice(
        database=context.resources.datastore_db,
        mongodb=context.resources.mongodb,
        import_request=import_request,
        log=context.log,
        attempt=context.retry_number if import_request.get("reset") else 0,
    )

    status = JobStatus(summary["status"])
    if status == JobStatus.ERROR:
        raise Failure(
            description=f"Import of {summary['identifier']} failed: {summary['error']}",
            metadata={
                "identifier": MetadataValue.text(summary["identifier"]),
                "rows": MetadataValue.int(summary["rows"]),
            },
        )
    if status == JobStatus.IN_PROGRESS:
        raise RetryRequested(max_retries=MAX_IMPORT_SLICES, seconds_to_wait=0)

    return summary
