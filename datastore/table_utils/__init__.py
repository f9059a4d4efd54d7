# =============================================================================
# Table Utils Library
# =============================================================================
# Header sanitization and schema building for datastore tables.
# =============================================================================

"""
Table utilities for the datastore import engine.

This library provides:
- sanitize_header / truncate_header: Storage-safe column identifiers
- sanitize_description: Line-break collapsing for free text
- build_table_schema: Schema construction with duplicate detection
"""

from .headers import (
    MAX_HEADER_LENGTH,
    build_table_schema,
    find_duplicates,
    sanitize_description,
    sanitize_header,
    truncate_header,
)
from .reserved_words import (
    INTERNAL_COLUMNS,
    RECORD_NUMBER_COLUMN,
    RESERVED_WORDS,
    is_reserved_word,
)

__all__ = [
    "INTERNAL_COLUMNS",
    "MAX_HEADER_LENGTH",
    "RECORD_NUMBER_COLUMN",
    "RESERVED_WORDS",
    "build_table_schema",
    "find_duplicates",
    "is_reserved_word",
    "sanitize_description",
    "sanitize_header",
    "truncate_header",
]
