# =============================================================================
# Data Models Library
# =============================================================================
# Pydantic models and settings for the datastore import engine.
# =============================================================================

"""
Data models for the datastore import engine.

This library provides:
- DatastoreResource: Resource descriptor
- JobStatus / Result: Import job lifecycle
- TableSchema / SchemaField: Table schema
- ImportCursor / ImportJobSnapshot: Versioned resume snapshot
- ImportSettings: Import job defaults
"""

# Resource
from .resource import DatastoreResource

# Result models
from .result import JobStatus, Result

# Schema models
from .schema import SchemaField, TableSchema

# Snapshot models
from .snapshot import SNAPSHOT_VERSION, ImportCursor, ImportJobSnapshot

# Request models
from .request import ImportRequest

# Configuration models
from .config import ImportSettings

__all__ = [
    # Resource
    "DatastoreResource",
    # Result models
    "JobStatus",
    "Result",
    # Schema models
    "SchemaField",
    "TableSchema",
    # Snapshot models
    "SNAPSHOT_VERSION",
    "ImportCursor",
    "ImportJobSnapshot",
    # Request models
    "ImportRequest",
    # Configuration models
    "ImportSettings",
]
