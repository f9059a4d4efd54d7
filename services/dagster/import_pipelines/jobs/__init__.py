"""Dagster Jobs - Executable Workflows."""

from .import_job import datastore_import_job

__all__ = ["datastore_import_job"]
