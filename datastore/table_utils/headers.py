# =============================================================================
# Table Headers Module
# =============================================================================
# Provides deterministic header sanitization for datastore imports.
# Ensures headers are unique, storage-safe SQL identifiers (<= 64 chars) and
# builds the text-typed table schema from the raw header row.
# =============================================================================

import hashlib
import logging
import re
from typing import Any, Iterable, List

from ..errors import DuplicateHeaders
from ..models import SchemaField, TableSchema
from .reserved_words import is_reserved_word

__all__ = [
    "MAX_HEADER_LENGTH",
    "HASH_SUFFIX_LENGTH",
    "sanitize_header",
    "truncate_header",
    "sanitize_description",
    "find_duplicates",
    "build_table_schema",
]

log = logging.getLogger(__name__)

MAX_HEADER_LENGTH = 64
HASH_SUFFIX_LENGTH = 4

# Pre-compiled patterns for common operations (optimization)
_NON_ALNUM_PATTERN = re.compile(r"[^A-Za-z0-9]+")
_LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")


# -----------------------------------------------------------------------------
# Identifier Sanitization
# -----------------------------------------------------------------------------
def truncate_header(name: str, max_length: int = MAX_HEADER_LENGTH) -> str:
    """
    Shorten an identifier to ``max_length`` characters, keeping it unique.

    Names within the limit are returned unchanged. Longer names keep their
    first ``max_length - 5`` characters followed by ``_`` and the first four
    hex digits of the MD5 of the full name, so two long names sharing a
    prefix still truncate to different identifiers.

    Args:
        name: Identifier to shorten.
        max_length: Maximum identifier length (default: 64).

    Returns:
        Identifier of at most ``max_length`` characters.

    Examples:
        >>> len(truncate_header("a" * 64))
        64
        >>> len(truncate_header("b" * 65))
        64
    """
    if len(name) <= max_length:
        return name

    digest = hashlib.md5(name.encode("utf-8")).hexdigest()[:HASH_SUFFIX_LENGTH]
    prefix = name[: max_length - (HASH_SUFFIX_LENGTH + 1)]
    return f"{prefix}_{digest}"


def sanitize_header(column: Any) -> str:
    """
    Convert a raw column name into a storage-safe identifier.

    Steps:
        1. Trim surrounding whitespace
        2. Replace every run of non-alphanumeric characters with "_"
        3. Strip leading/trailing underscores and lowercase
        4. Prefix "_" when starting with a digit or equal to a reserved word
        5. Truncate to 64 characters (see truncate_header)

    Args:
        column: Raw header value (non-strings are converted with str()).

    Returns:
        Sanitized identifier, or "" when nothing usable remains.

    Examples:
        >>> sanitize_header("column name with spaces in it")
        'column_name_with_spaces_in_it'
        >>> sanitize_header("accessible")
        '_accessible'
        >>> sanitize_header(1)
        '_1'
    """
    normalized = str(column).strip()
    normalized = _NON_ALNUM_PATTERN.sub("_", normalized)
    normalized = normalized.strip("_").lower()

    if not normalized:
        return ""

    if normalized[0].isdigit() or is_reserved_word(normalized):
        normalized = f"_{normalized}"

    return truncate_header(normalized)


def sanitize_description(text: Any) -> str:
    """
    Collapse line breaks in free text (e.g. field descriptions) to spaces.

    All other characters are preserved; this is not an identifier transform.

    Examples:
        >>> sanitize_description("Multi\\nLine")
        'Multi Line'
    """
    return _LINE_BREAK_PATTERN.sub(" ", str(text))


# -----------------------------------------------------------------------------
# Schema Building
# -----------------------------------------------------------------------------
def find_duplicates(names: Iterable[str]) -> List[str]:
    """
    List names that occur more than once, each once, in first-seen order.

    Examples:
        >>> find_duplicates(["foo", "bar", "bar", "baz", "baz", "bar"])
        ['bar', 'baz']
    """
    seen = set()
    duplicates: List[str] = []
    for name in names:
        if name in seen and name not in duplicates:
            duplicates.append(name)
        seen.add(name)
    return duplicates


def build_table_schema(headers: Iterable[Any]) -> TableSchema:
    """
    Build the text-typed table schema for a raw header row.

    Empty headers become ``col_{index}``. The original header text, with
    line breaks collapsed, is kept as the field description.

    Args:
        headers: Raw header row, in file order.

    Returns:
        TableSchema with one text field per header.

    Raises:
        DuplicateHeaders: If two headers sanitize to the same identifier.

    Examples:
        >>> build_table_schema(["First Name", "Age"]).column_names
        ['first_name', 'age']
    """
    raw_headers = list(headers)
    names = []
    for idx, raw in enumerate(raw_headers):
        name = sanitize_header(raw)
        names.append(name or f"col_{idx}")

    duplicates = find_duplicates(names)
    if duplicates:
        raise DuplicateHeaders(duplicates)

    fields = {
        name: SchemaField(name=name, description=sanitize_description(raw).strip())
        for name, raw in zip(names, raw_headers)
    }
    log.debug(f"Built schema with {len(fields)} fields: {list(fields)}")
    return TableSchema(fields=fields)
