# =============================================================================
# Snapshot Models
# =============================================================================
# Versioned, documented wire format of a serialized import job:
# - ImportCursor: resume position within the resource
# - ImportJobSnapshot: everything needed to rehydrate a job
# =============================================================================

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, field_validator

from ..errors import SnapshotVersionError
from .resource import DatastoreResource
from .result import JobStatus

__all__ = ["ImportCursor", "ImportJobSnapshot", "SNAPSHOT_VERSION"]

SNAPSHOT_VERSION = 1


class ImportCursor(BaseModel):
    """
    Resume position of an import job.

    Row 0 of the parser stream is the header row, so once the header has
    been processed the next parser offset is ``rows_committed + 1``.

    Attributes:
        header_processed: Whether the header row was read and the schema created
        rows_committed: Number of data rows stored so far
    """

    header_processed: bool = Field(False, description="Header row consumed")
    rows_committed: NonNegativeInt = Field(0, description="Data rows stored")

    model_config = ConfigDict(extra="ignore")

    @property
    def parser_offset(self) -> int:
        if not self.header_processed:
            return 0
        return self.rows_committed + 1


class ImportJobSnapshot(BaseModel):
    """
    Serialized state of an import job.

    Unknown fields are ignored and every field added after version 1 must
    carry a default, so older snapshots keep loading.

    Attributes:
        version: Snapshot format version
        status: Job status at serialization time
        time_limit: Per-run time budget in seconds (None = unbounded)
        resource: Resource descriptor
        cursor: Resume cursor
        error: Error message when status is ERROR
    """

    version: int = Field(SNAPSHOT_VERSION, ge=1, description="Snapshot format version")
    status: JobStatus = Field(JobStatus.STOPPED, description="Job status")
    time_limit: Optional[NonNegativeInt] = Field(None, description="Time budget (seconds)")
    resource: DatastoreResource = Field(..., description="Resource descriptor")
    cursor: ImportCursor = Field(default_factory=ImportCursor, description="Resume cursor")
    error: Optional[str] = Field(None, description="Error message if failed")

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "version": 1,
                "status": "in_progress",
                "time_limit": 40,
                "resource": {
                    "id": "1",
                    "uri": "/data/countries.csv",
                    "mime_type": "text/csv",
                },
                "cursor": {"header_processed": True, "rows_committed": 2},
                "error": None,
            }
        },
    )

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: int) -> int:
        if v > SNAPSHOT_VERSION:
            raise SnapshotVersionError(
                f"Snapshot version {v} is newer than supported version {SNAPSHOT_VERSION}"
            )
        return v
