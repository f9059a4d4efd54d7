# =============================================================================
# Capability Contracts
# =============================================================================
# Abstract base classes for the collaborators an import job is wired to:
# - ParserInterface: resource -> ordered rows of strings
# - DatabaseTableInterface: row storage for one datastore table
# - JobStoreInterface: persistent snapshots keyed by job identifier
# =============================================================================

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from .errors import ContractViolation
from .models import DatastoreResource, TableSchema

__all__ = [
    "ParserInterface",
    "DatabaseTableInterface",
    "JobStoreInterface",
    "require_capability",
]


class ParserInterface(ABC):
    """
    Turns a resource into an ordered, lazy sequence of string tuples.

    Row 0 is the first line of the resource (the header row for CSV).
    """

    @abstractmethod
    def rows(
        self, resource: DatastoreResource, offset: int = 0
    ) -> Iterator[Tuple[str, ...]]:
        """
        Iterate the rows of ``resource`` starting at row ``offset``.

        Args:
            resource: Resource to read
            offset: Number of leading rows to skip

        Raises:
            SourceUnavailable: If the resource cannot be opened
            UnsupportedContent: If the content is not delimited text
            UnderlyingFault: For any other parse failure
        """


class DatabaseTableInterface(ABC):
    """Row storage for a single datastore table."""

    @abstractmethod
    def create_schema(self, schema: TableSchema) -> None:
        """Create the table for ``schema`` (no-op if it already exists)."""

    @abstractmethod
    def get_schema(self) -> Optional[TableSchema]:
        """Return the table schema, or None if the table does not exist."""

    @abstractmethod
    def insert(self, row: Sequence[str]) -> None:
        """Append one row, positionally aligned with the schema."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored rows."""

    @abstractmethod
    def retrieve_all(self) -> List[Tuple[str, ...]]:
        """Return every stored row in insertion order."""

    @abstractmethod
    def drop(self) -> None:
        """Delete the table and all of its rows."""


class JobStoreInterface(ABC):
    """Persistent map of job identifier -> serialized snapshot."""

    @abstractmethod
    def retrieve(self, identifier: str) -> Optional[Dict[str, Any]]:
        """Return the stored snapshot for ``identifier``, if any."""

    @abstractmethod
    def store(self, identifier: str, snapshot: Dict[str, Any]) -> None:
        """Create or replace the snapshot for ``identifier``."""

    @abstractmethod
    def remove(self, identifier: str) -> None:
        """Delete the snapshot for ``identifier`` (no-op if absent)."""


def require_capability(obj: Any, capability: type, label: str) -> Any:
    """
    Check that ``obj`` implements ``capability``.

    Args:
        obj: Collaborator supplied by the caller
        capability: Required abstract base class
        label: Human-readable role used in the error message ("Storage")

    Returns:
        ``obj`` unchanged

    Raises:
        ContractViolation: If ``obj`` is not an instance of ``capability``
    """
    if not isinstance(obj, capability):
        raise ContractViolation(
            f"{label} must be an instance of "
            f"{capability.__module__}.{capability.__qualname__}"
        )
    return obj
