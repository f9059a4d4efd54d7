"""Dagster Ops - Reusable Computation Units."""

from .import_ops import run_import_slice

__all__ = ["run_import_slice"]
