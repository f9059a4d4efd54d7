# =============================================================================
# Importer Library
# =============================================================================
# Import job controller, resume protocol and job registry.
# =============================================================================

"""
Importer for the datastore.

This library provides:
- ImportJob: Time-sliced, resumable import of one resource
- serialize / hydrate: Versioned snapshot protocol
- ImportJobRegistry / build_import_job: Process-local job cache and factory
"""

from .job import ImportJob, unpack_config
from .registry import ImportJobRegistry, build_import_job
from .serialization import hydrate, load_snapshot, serialize

__all__ = [
    "ImportJob",
    "ImportJobRegistry",
    "build_import_job",
    "hydrate",
    "load_snapshot",
    "serialize",
    "unpack_config",
]
