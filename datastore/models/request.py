# =============================================================================
# Import Request Model
# =============================================================================
# Run config payload for one orchestrated import slice.
# =============================================================================

from typing import Optional

from pydantic import BaseModel, Field, NonNegativeInt

from .resource import DatastoreResource

__all__ = ["ImportRequest"]


class ImportRequest(BaseModel):
    """
    Request to run (or continue) the import of one resource.

    Attributes:
        resource: Resource descriptor
        identifier: Job identifier (defaults to the resource id)
        time_limit: Per-slice time budget in seconds (None keeps the job's)
        reset: Drop the table and saved job state before the first slice
    """

    resource: DatastoreResource = Field(..., description="Resource to import")
    identifier: Optional[str] = Field(None, description="Job identifier")
    time_limit: Optional[NonNegativeInt] = Field(None, description="Time budget per slice (seconds)")
    reset: bool = Field(False, description="Drop the table and job state before importing")

    @property
    def job_identifier(self) -> str:
        return self.identifier or self.resource.id
