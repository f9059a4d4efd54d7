"""
Unit tests for the streaming CSV parser.

Uses the files in tests/data and small generated files.
"""

import gzip

import pytest

from datastore.errors import SourceUnavailable, UnderlyingFault, UnsupportedContent
from datastore.models import DatastoreResource
from datastore.parsers import DELIMITERS_BY_MIME_TYPE, CsvParser


def _rows(resource, offset=0, **kwargs):
    return list(CsvParser(**kwargs).rows(resource, offset=offset))


class TestCsvParserRows:
    """Test row iteration."""

    def test_header_is_row_zero(self, countries_resource):
        rows = _rows(countries_resource)

        assert rows[0] == ("country", "population", "id")
        assert rows[1] == ("US", "315209000", "1")
        assert len(rows) == 5

    def test_values_stay_text(self, countries_resource):
        rows = _rows(countries_resource)

        assert all(isinstance(value, str) for row in rows for value in row)

    def test_offset_skips_leading_rows(self, countries_resource):
        rows = _rows(countries_resource, offset=3)

        assert rows == [("AR", "41700000", "3"), ("JP", "127595000", "4")]

    def test_offset_past_end(self, countries_resource):
        assert _rows(countries_resource, offset=10) == []

    def test_offset_across_batches(self, large_csv):
        """Test that offsets land on the right row when skipping whole batches."""
        resource = DatastoreResource(id="large", uri=str(large_csv))

        rows = _rows(resource, offset=501, block_size=256)

        assert rows[0] == ("501", "name 501", "5010")
        assert len(rows) == 500

    def test_empty_cells_are_empty_strings(self, tmp_path):
        path = tmp_path / "blanks.csv"
        path.write_text("a,b,c\n1,,3\n")

        rows = _rows(DatastoreResource(id=1, uri=str(path)))

        assert rows[1] == ("1", "", "3")

    def test_tab_separated(self, make_resource):
        resource = make_resource("people.tsv", mime_type="text/tab-separated-values")

        rows = _rows(resource)

        assert rows[0] == ("id", "name", "notes")
        assert rows[2] == ("2", "Bob", "quoted\nvalue")

    def test_explicit_delimiter_overrides_mime_type(self, tmp_path):
        path = tmp_path / "semicolons.csv"
        path.write_text("a;b\n1;2\n")

        rows = _rows(DatastoreResource(id=1, uri=str(path)), delimiter=";")

        assert rows == [("a", "b"), ("1", "2")]

    def test_file_uri(self, data_dir):
        resource = DatastoreResource(id=1, uri=(data_dir / "countries.csv").as_uri())

        assert len(_rows(resource)) == 5

    def test_gzip_compressed(self, tmp_path):
        path = tmp_path / "countries.csv.gz"
        with gzip.open(path, "wt") as f:
            f.write("a,b\n1,2\n")

        rows = _rows(DatastoreResource(id=1, uri=str(path)))

        assert rows == [("a", "b"), ("1", "2")]

    def test_whitespace_only_file_yields_nothing(self, tmp_path):
        path = tmp_path / "blank.csv"
        path.write_text("\n\n  \n")

        assert _rows(DatastoreResource(id=1, uri=str(path))) == []

    def test_latin1_encoding(self, tmp_path):
        path = tmp_path / "latin1.csv"
        path.write_bytes("name\ncaf\xe9\n".encode("latin-1"))

        rows = _rows(DatastoreResource(id=1, uri=str(path)), encoding="latin-1")

        assert rows[1] == ("caf\xe9",)


class TestCsvParserErrors:
    """Test error classification."""

    def test_missing_file(self, data_dir):
        resource = DatastoreResource(id=1, uri=str(data_dir / "nope.csv"))

        with pytest.raises(SourceUnavailable):
            _rows(resource)

    def test_binary_content(self, binary_file):
        with pytest.raises(UnsupportedContent, match="not a text file"):
            _rows(DatastoreResource(id=1, uri=str(binary_file)))

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "latin1.csv"
        path.write_bytes("name\ncaf\xe9\n".encode("latin-1"))

        with pytest.raises(UnsupportedContent):
            _rows(DatastoreResource(id=1, uri=str(path)))

    def test_unsupported_mime_type(self, make_resource):
        with pytest.raises(UnsupportedContent, match="Unsupported MIME type"):
            _rows(make_resource("countries.csv", mime_type="image/png"))

    def test_ragged_rows(self, tmp_path):
        path = tmp_path / "ragged.csv"
        path.write_text("a,b,c\n1,2,3\n4,5\n")

        with pytest.raises(UnderlyingFault):
            _rows(DatastoreResource(id=1, uri=str(path)))


class TestDelimiterTable:
    def test_csv_and_tsv_types(self):
        assert DELIMITERS_BY_MIME_TYPE["text/csv"] == ","
        assert DELIMITERS_BY_MIME_TYPE["text/tab-separated-values"] == "\t"
