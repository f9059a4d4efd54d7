# =============================================================================
# Job Instance Registry
# =============================================================================
# Process-local cache of live import jobs keyed by identifier.
# =============================================================================

import logging
from typing import Any, Dict, Mapping, Optional

from ..contracts import JobStoreInterface, require_capability
from ..models import ImportSettings
from .job import ImportJob, unpack_config

__all__ = ["ImportJobRegistry", "build_import_job"]

logger = logging.getLogger(__name__)


def build_import_job(
    identifier: str,
    config: Mapping[str, Any],
    settings: Optional[ImportSettings] = None,
) -> ImportJob:
    """
    Construct a new job wired to ``config["resource"]``, ``config["storage"]``
    and ``config.get("parser")``.

    Raises:
        ContractViolation: If config has no resource or a collaborator has
            the wrong type
    """
    resource, storage, parser = unpack_config(config)
    return ImportJob(resource, storage, parser, identifier=identifier, settings=settings)


class ImportJobRegistry:
    """
    Caller-owned map of identifier -> live ImportJob.

    Guarantees at most one job object per identifier for the lifetime of the
    registry (typically one process or one request). It does not serialize
    concurrent calls; callers must not run the same job from two threads.

    With a job store, jobs not yet cached are loaded from it (ImportJob.get),
    so progress also survives across registries and processes.

    Example:
        >>> registry = ImportJobRegistry()
        >>> job = registry.get_instance("1", {"resource": resource, "storage": table})
        >>> registry.get_instance("1", {"resource": other}) is job
        True
    """

    def __init__(
        self,
        job_store: Optional[JobStoreInterface] = None,
        settings: Optional[ImportSettings] = None,
    ):
        if job_store is not None:
            require_capability(job_store, JobStoreInterface, "Job store")
        self.job_store = job_store
        self.settings = settings
        self._jobs: Dict[str, ImportJob] = {}

    def get_instance(self, identifier: str, config: Mapping[str, Any]) -> ImportJob:
        """
        Return the live job for ``identifier``, creating it on first use.

        ``config`` is ignored on a cache hit but must still name a resource.

        Raises:
            ContractViolation: If config has no resource, or a new job cannot
                be wired from it
        """
        unpack_config(config)
        identifier = str(identifier)

        job = self._jobs.get(identifier)
        if job is not None:
            return job

        if self.job_store is not None:
            job = ImportJob.get(identifier, self.job_store, config, settings=self.settings)
        else:
            job = build_import_job(identifier, config, settings=self.settings)

        self._jobs[identifier] = job
        logger.debug(f"Registered import job {identifier}")
        return job

    def forget(self, identifier: str) -> None:
        self._jobs.pop(str(identifier), None)

    def clear(self) -> None:
        self._jobs.clear()

    def __contains__(self, identifier: object) -> bool:
        return str(identifier) in self._jobs

    def __len__(self) -> int:
        return len(self._jobs)
