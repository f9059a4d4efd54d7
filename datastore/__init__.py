# =============================================================================
# Datastore Import Libraries
# =============================================================================
# Resumable, time-sliced import of tabular resources into row storage.
# See individual sub-packages for detailed documentation.
# =============================================================================

"""
Datastore import libraries.

Sub-packages:
- models: Pydantic data models, snapshots and settings
- table_utils: Header sanitization and schema building
- parsers: Streaming CSV/TSV parser
- storage: Row storage backends and job stores
- importer: Import job controller, serialization and registry
"""

__version__ = "0.1.0"
