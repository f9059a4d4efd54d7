# =============================================================================
# Result Model
# =============================================================================
# Lifecycle status of an import job and its externally visible result.
# =============================================================================

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

__all__ = ["JobStatus", "Result", "TERMINAL_STATUSES"]


class JobStatus(str, Enum):
    """Status of an import job."""

    STOPPED = "stopped"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    ERROR = "error"


TERMINAL_STATUSES = frozenset({JobStatus.DONE, JobStatus.ERROR})


class Result(BaseModel):
    """
    Outcome of the most recent ``run()`` of an import job.

    Attributes:
        status: Current job status
        error: Error message when status is ERROR
    """

    status: JobStatus = Field(JobStatus.STOPPED, description="Current job status")
    error: Optional[str] = Field(None, description="Error message if failed")

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES
