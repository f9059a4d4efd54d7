# =============================================================================
# Datastore Errors
# =============================================================================
# Exception taxonomy shared by parsers, storage backends and the importer.
# =============================================================================

"""Exceptions raised by the datastore import libraries."""

__all__ = [
    "DatastoreError",
    "ContractViolation",
    "SourceUnavailable",
    "UnsupportedContent",
    "DuplicateHeaders",
    "UnderlyingFault",
    "SnapshotVersionError",
]


class DatastoreError(Exception):
    """Base class for all datastore errors."""


class ContractViolation(DatastoreError, TypeError):
    """
    A collaborator does not satisfy the capability it was wired in for.

    Raised synchronously while constructing a job, never from ``run()``.
    """


class SourceUnavailable(DatastoreError):
    """The resource is missing or cannot be opened for reading."""


class UnsupportedContent(DatastoreError):
    """The resource content is not decodable as delimited text."""


class DuplicateHeaders(DatastoreError):
    """Two or more headers sanitize to the same storage identifier."""

    def __init__(self, duplicates: list[str]):
        self.duplicates = list(duplicates)
        super().__init__(f"Duplicate headers error: {', '.join(self.duplicates)}")


class UnderlyingFault(DatastoreError):
    """Any other parse or storage failure, carrying the root cause text."""


class SnapshotVersionError(DatastoreError, ValueError):
    """A snapshot was written by a newer, unsupported format version."""
