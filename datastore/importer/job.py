# =============================================================================
# Import Job Controller
# =============================================================================
# Drives parse -> sanitize -> store for one resource within a time budget.
# Owns the result state machine and the resume cursor; snapshots itself into
# a job store (when one is wired in) after every state change.
# =============================================================================

import logging
import time
from typing import Any, Mapping, Optional, Tuple

from ..contracts import (
    DatabaseTableInterface,
    JobStoreInterface,
    ParserInterface,
    require_capability,
)
from ..errors import ContractViolation, DatastoreError, UnsupportedContent
from ..models import (
    DatastoreResource,
    ImportCursor,
    ImportSettings,
    JobStatus,
    Result,
)
from ..parsers import CsvParser
from ..table_utils import build_table_schema
from .serialization import hydrate, serialize

__all__ = ["ImportJob", "unpack_config"]

logger = logging.getLogger(__name__)


def unpack_config(
    config: Mapping[str, Any],
) -> Tuple[Any, Any, Optional[Any]]:
    """
    Extract ``(resource, storage, parser)`` from a job config mapping.

    Raises:
        ContractViolation: If config is not a mapping or has no resource
    """
    if not isinstance(config, Mapping):
        raise ContractViolation(
            f"config must be a mapping, got {type(config).__name__}"
        )
    if config.get("resource") is None:
        raise ContractViolation("config['resource'] is required")
    return config["resource"], config.get("storage"), config.get("parser")


class ImportJob:
    """
    Resumable, time-sliced import of one resource into one datastore table.

    Statuses:
        STOPPED -> IN_PROGRESS (time budget reached, input remains)
        STOPPED | IN_PROGRESS -> DONE | ERROR
        DONE | ERROR -> (run() is a no-op until drop())
        any -> STOPPED via drop()

    Data faults (missing file, binary content, duplicate headers, parse or
    storage failures) never escape ``run()``; they are recorded in the
    ERROR result. Only wiring mistakes raise, and only at construction.

    Example:
        >>> job = ImportJob(resource, MemoryDatabaseTable())
        >>> job.set_time_limit(40)
        >>> job.run().status
        <JobStatus.DONE: 'done'>
    """

    def __init__(
        self,
        resource: DatastoreResource,
        storage: DatabaseTableInterface,
        parser: Optional[ParserInterface] = None,
        *,
        identifier: Optional[str] = None,
        job_store: Optional[JobStoreInterface] = None,
        settings: Optional[ImportSettings] = None,
    ):
        self.settings = settings or ImportSettings()

        self.storage = require_capability(storage, DatabaseTableInterface, "Storage")
        if parser is None:
            parser = CsvParser(encoding=self.settings.csv_encoding)
        self.parser = require_capability(parser, ParserInterface, "Parser")
        if job_store is not None:
            require_capability(job_store, JobStoreInterface, "Job store")
        self.job_store = job_store

        if isinstance(resource, Mapping):
            resource = DatastoreResource(**resource)
        self.resource = require_capability(resource, DatastoreResource, "Resource")
        self.identifier = str(identifier) if identifier is not None else self.resource.id

        self._status = JobStatus.STOPPED
        self._error: Optional[str] = None
        self._time_limit: Optional[int] = self.settings.time_limit
        self._cursor = ImportCursor()

    def __repr__(self) -> str:
        return (
            f"ImportJob(identifier={self.identifier!r}, status={self._status.value!r}, "
            f"rows_committed={self._cursor.rows_committed})"
        )

    # ------------------------------------------------------------------
    # Construction from a job store
    # ------------------------------------------------------------------

    @classmethod
    def get(
        cls,
        identifier: str,
        job_store: JobStoreInterface,
        config: Mapping[str, Any],
        settings: Optional[ImportSettings] = None,
    ) -> "ImportJob":
        """
        Load the job for ``identifier`` from ``job_store``, or create it.

        A stored snapshot is rehydrated against the storage and parser in
        ``config`` so the next ``run()`` continues from the saved cursor.

        Args:
            identifier: Job identifier
            job_store: Persistent snapshot store
            config: Mapping with "resource", "storage" and optional "parser"
            settings: Defaults for new jobs

        Raises:
            ContractViolation: If job_store, storage or parser has the wrong
                type, or config has no resource
        """
        require_capability(job_store, JobStoreInterface, "Job store")
        resource, storage, parser = unpack_config(config)
        require_capability(storage, DatabaseTableInterface, "Storage")
        identifier = str(identifier)

        snapshot = job_store.retrieve(identifier)
        if snapshot is not None:
            logger.info(f"Resuming import job {identifier} from stored snapshot")
            return hydrate(
                snapshot,
                storage=storage,
                parser=parser,
                job_store=job_store,
                identifier=identifier,
                settings=settings,
            )

        job = cls(
            resource,
            storage,
            parser,
            identifier=identifier,
            job_store=job_store,
            settings=settings,
        )
        job._persist()
        return job

    @staticmethod
    def hydrate(
        snapshot: Any,
        *,
        storage: Optional[DatabaseTableInterface] = None,
        parser: Optional[ParserInterface] = None,
        job_store: Optional[JobStoreInterface] = None,
        identifier: Optional[str] = None,
        settings: Optional[ImportSettings] = None,
    ) -> "ImportJob":
        """
        Rebuild a job from a snapshot; see serialization.hydrate.

        Raises:
            ContractViolation: If storage is missing or a collaborator has
                the wrong type
        """
        return hydrate(
            snapshot,
            storage=storage,
            parser=parser,
            job_store=job_store,
            identifier=identifier,
            settings=settings,
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get_result(self) -> Result:
        return Result(status=self._status, error=self._error)

    def get_storage(self) -> DatabaseTableInterface:
        return self.storage

    def get_parser(self) -> ParserInterface:
        return self.parser

    def get_resource(self) -> DatastoreResource:
        return self.resource

    def get_time_limit(self) -> Optional[int]:
        return self._time_limit

    def get_cursor(self) -> ImportCursor:
        return self._cursor.model_copy()

    def set_time_limit(self, seconds: Optional[int]) -> None:
        """
        Set the per-run time budget in seconds (None runs to completion).

        Raises:
            ValueError: If seconds is negative
        """
        if seconds is not None:
            seconds = int(seconds)
            if seconds < 0:
                raise ValueError(f"Time limit must be >= 0, got {seconds}")
        self._time_limit = seconds
        self._persist()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def run(self) -> Result:
        """
        Import rows until the input is exhausted or the time budget is spent.

        Returns:
            The job result after this run
        """
        if self.get_result().is_terminal:
            logger.info(
                f"Import job {self.identifier} already {self._status.value}; nothing to do"
            )
            return self.get_result()

        self._status = JobStatus.IN_PROGRESS
        self._error = None

        try:
            finished = self._run_it()
        except DatastoreError as e:
            self._fail(str(e))
        except Exception as e:
            logger.exception(f"Unexpected failure importing {self.resource.uri}")
            self._fail(f"{type(e).__name__}: {e}")
        else:
            if finished:
                self._status = JobStatus.DONE
                logger.info(
                    f"Import job {self.identifier} done: "
                    f"{self._cursor.rows_committed} rows"
                )

        self._persist()
        return self.get_result()

    def drop(self) -> None:
        """Drop the datastore table and reset the job to STOPPED."""
        self.storage.drop()
        self._status = JobStatus.STOPPED
        self._error = None
        self._cursor = ImportCursor()
        logger.info(f"Dropped import job {self.identifier}")
        self._persist()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run_it(self) -> bool:
        """Returns True when the input was exhausted."""
        started = time.monotonic()
        self._reconcile_cursor()

        rows = self.parser.rows(self.resource, offset=self._cursor.parser_offset)
        try:
            if not self._cursor.header_processed:
                header = next(rows, None)
                if header is None:
                    raise UnsupportedContent(
                        f"Resource {self.resource.uri} has no header row"
                    )
                schema = build_table_schema(header)
                self.storage.create_schema(schema)
                self._cursor.header_processed = True
                logger.info(
                    f"Created schema for {self.identifier}: {schema.column_names}"
                )

            processed = 0
            checkpoint = self.settings.checkpoint_rows
            for row in rows:
                if (
                    self._time_limit is not None
                    and processed
                    and processed % checkpoint == 0
                    and time.monotonic() - started >= self._time_limit
                ):
                    logger.info(
                        f"Import job {self.identifier} paused after {processed} rows "
                        f"(time limit {self._time_limit}s)"
                    )
                    return False
                self.storage.insert(row)
                self._cursor.rows_committed += 1
                processed += 1
            return True
        finally:
            close = getattr(rows, "close", None)
            if close is not None:
                close()

    def _reconcile_cursor(self) -> None:
        """Align the cursor with what the storage has actually committed."""
        schema = self.storage.get_schema()
        if schema is None:
            if self._cursor.header_processed:
                logger.warning(
                    f"Storage for {self.identifier} has no table; restarting import"
                )
            self._cursor = ImportCursor()
            return

        committed = self.storage.count()
        if not self._cursor.header_processed or committed != self._cursor.rows_committed:
            logger.info(
                f"Resuming {self.identifier} at row {committed} "
                f"(cursor had {self._cursor.rows_committed})"
            )
        self._cursor = ImportCursor(header_processed=True, rows_committed=committed)

    def _fail(self, message: str) -> None:
        self._status = JobStatus.ERROR
        self._error = message
        logger.error(f"Import job {self.identifier} failed: {message}")

    def _restore(
        self,
        status: JobStatus,
        time_limit: Optional[int],
        cursor: ImportCursor,
        error: Optional[str],
    ) -> None:
        self._status = status
        self._time_limit = time_limit
        self._cursor = cursor.model_copy()
        self._error = error

    def _persist(self) -> None:
        if self.job_store is None:
            return
        self.job_store.store(self.identifier, serialize(self).model_dump(mode="json"))
