"""Parsers turning datastore resources into rows of strings."""

from .csv_parser import DELIMITERS_BY_MIME_TYPE, CsvParser

__all__ = ["CsvParser", "DELIMITERS_BY_MIME_TYPE"]
