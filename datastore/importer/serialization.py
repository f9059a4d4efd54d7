# =============================================================================
# Serialization / Resume Protocol
# =============================================================================
# Explicit snapshot <-> job conversion. A snapshot carries the resource,
# time limit, status, error and resume cursor; storage and parser are live
# collaborators and are supplied again on hydrate.
# =============================================================================

import json
import logging
from typing import TYPE_CHECKING, Any, Optional

from ..errors import ContractViolation, SnapshotVersionError
from ..models import SNAPSHOT_VERSION, ImportJobSnapshot, ImportSettings

if TYPE_CHECKING:
    from ..contracts import DatabaseTableInterface, JobStoreInterface, ParserInterface
    from .job import ImportJob

__all__ = ["serialize", "hydrate", "load_snapshot"]

logger = logging.getLogger(__name__)


def serialize(job: "ImportJob") -> ImportJobSnapshot:
    """
    Capture the observable state of a job.

    Use ``serialize(job).model_dump_json()`` for the wire form.
    """
    return ImportJobSnapshot(
        version=SNAPSHOT_VERSION,
        status=job.get_result().status,
        time_limit=job.get_time_limit(),
        resource=job.get_resource(),
        cursor=job.get_cursor(),
        error=job.get_result().error,
    )


def load_snapshot(data: Any) -> ImportJobSnapshot:
    """
    Parse a snapshot from a model, a dict or a JSON string.

    Raises:
        SnapshotVersionError: If the snapshot is newer than this library
        pydantic.ValidationError: If required fields are missing or invalid
    """
    if isinstance(data, ImportJobSnapshot):
        return data
    if isinstance(data, (str, bytes)):
        data = json.loads(data)
    if not isinstance(data, dict):
        raise TypeError(f"Snapshot must be a mapping, got {type(data).__name__}")

    version = data.get("version", SNAPSHOT_VERSION)
    if isinstance(version, int) and version > SNAPSHOT_VERSION:
        raise SnapshotVersionError(
            f"Snapshot version {version} is newer than supported version {SNAPSHOT_VERSION}"
        )
    return ImportJobSnapshot.model_validate(data)


def hydrate(
    snapshot: Any,
    *,
    storage: Optional["DatabaseTableInterface"] = None,
    parser: Optional["ParserInterface"] = None,
    job_store: Optional["JobStoreInterface"] = None,
    identifier: Optional[str] = None,
    settings: Optional[ImportSettings] = None,
) -> "ImportJob":
    """
    Rebuild a job whose status, time limit, error and cursor match ``snapshot``.

    The next ``run()`` continues from the saved cursor; a DONE or ERROR job
    stays terminal.

    Args:
        snapshot: ImportJobSnapshot, dict or JSON string
        storage: Row storage the job was importing into
        parser: Parser (default: CsvParser)
        job_store: Job store to persist further state changes into
        identifier: Job identifier (default: the resource id)
        settings: Import settings (time_limit is taken from the snapshot)

    Raises:
        ContractViolation: If storage is missing, or storage or parser has
            the wrong type
        SnapshotVersionError: If the snapshot is newer than this library
    """
    from .job import ImportJob

    if storage is None:
        raise ContractViolation("storage is required")

    loaded = load_snapshot(snapshot)
    job = ImportJob(
        loaded.resource,
        storage,
        parser,
        identifier=identifier,
        job_store=job_store,
        settings=settings,
    )
    job._restore(
        status=loaded.status,
        time_limit=loaded.time_limit,
        cursor=loaded.cursor,
        error=loaded.error,
    )
    logger.debug(f"Hydrated import job {job.identifier} ({loaded.status.value})")
    return job
