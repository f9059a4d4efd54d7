"""
Shared pytest fixtures for datastore import tests.

Provides test data paths, in-memory collaborators and job factories to avoid
duplication across test files.
"""

from pathlib import Path

import pytest

from datastore.importer import ImportJob
from datastore.models import DatastoreResource, ImportSettings
from datastore.storage import MemoryDatabaseTable, MemoryJobStore


DATA_DIR = Path(__file__).parent / "data"


# =============================================================================
# Test Data Fixtures
# =============================================================================

@pytest.fixture
def data_dir():
    """Directory holding the CSV test files."""
    return DATA_DIR


@pytest.fixture
def make_resource(data_dir):
    """Build a DatastoreResource for a file in tests/data."""
    def _make(filename, resource_id=1, mime_type="text/csv"):
        return DatastoreResource(
            id=resource_id,
            uri=str(data_dir / filename),
            mime_type=mime_type,
        )
    return _make


@pytest.fixture
def countries_resource(make_resource):
    """Four-row countries CSV resource."""
    return make_resource("countries.csv")


@pytest.fixture
def large_csv(tmp_path):
    """CSV with a header row and 1000 data rows."""
    path = tmp_path / "large.csv"
    lines = ["id,name,value"]
    lines.extend(f"{i},name {i},{i * 10}" for i in range(1, 1001))
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def binary_file(tmp_path):
    """Small PNG-like file with NUL bytes."""
    path = tmp_path / "image.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01")
    return path


# =============================================================================
# Collaborator Fixtures
# =============================================================================

@pytest.fixture
def memory_table():
    """Empty in-memory datastore table."""
    return MemoryDatabaseTable()


@pytest.fixture
def job_store():
    """Empty in-memory job store."""
    return MemoryJobStore()


@pytest.fixture
def import_settings():
    """Import settings independent of the environment."""
    return ImportSettings(time_limit=None, checkpoint_rows=100, csv_encoding="utf8")


@pytest.fixture
def make_job(memory_table, import_settings):
    """Build an ImportJob on the in-memory table."""
    def _make(resource, **kwargs):
        kwargs.setdefault("settings", import_settings)
        return ImportJob(resource, kwargs.pop("storage", memory_table), **kwargs)
    return _make
