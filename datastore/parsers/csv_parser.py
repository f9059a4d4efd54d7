# =============================================================================
# CSV Parser
# =============================================================================
# Streaming CSV/TSV reader built on pyarrow.csv.
# Every value is kept as text; rows are yielded lazily as string tuples so
# the importer can stop at any row and resume later from a row offset.
# =============================================================================

import logging
from typing import Iterator, Optional, Tuple

import pyarrow as pa
import pyarrow.csv as csv
import pyarrow.fs as pafs

from ..contracts import ParserInterface
from ..errors import SourceUnavailable, UnderlyingFault, UnsupportedContent
from ..models import DatastoreResource

__all__ = ["CsvParser", "DELIMITERS_BY_MIME_TYPE"]

logger = logging.getLogger(__name__)

DELIMITERS_BY_MIME_TYPE = {
    "text/csv": ",",
    "application/csv": ",",
    "text/plain": ",",
    "text/tab-separated-values": "\t",
    "text/tsv": "\t",
}

# Bytes inspected for binary content before parsing
SNIFF_BYTES = 8192


class CsvParser(ParserInterface):
    """
    Streaming delimited-text parser.

    Row 0 is the first record of the file (the header row); no row is
    treated specially. Empty cells are returned as "" and values are never
    type-converted.

    Attributes:
        encoding: Source encoding (default: "utf8")
        block_size: pyarrow read block size in bytes (default: pyarrow's)
        delimiter: Field delimiter; derived from the MIME type when None

    Example:
        >>> parser = CsvParser()
        >>> resource = DatastoreResource(id=1, uri="/data/countries.csv")
        >>> for row in parser.rows(resource, offset=1):
        ...     print(row)
    """

    def __init__(
        self,
        encoding: str = "utf8",
        block_size: Optional[int] = None,
        delimiter: Optional[str] = None,
    ):
        self.encoding = encoding
        self.block_size = block_size
        self.delimiter = delimiter

    def __repr__(self) -> str:
        return (
            f"CsvParser(encoding={self.encoding!r}, block_size={self.block_size!r}, "
            f"delimiter={self.delimiter!r})"
        )

    def rows(
        self, resource: DatastoreResource, offset: int = 0
    ) -> Iterator[Tuple[str, ...]]:
        """
        Iterate the rows of ``resource`` starting at row ``offset``.

        Leading rows are skipped by whole record batches; only the batch that
        contains ``offset`` is sliced.

        Args:
            resource: Resource to read
            offset: Number of leading rows to skip (0 includes the header)

        Yields:
            One tuple of strings per record

        Raises:
            SourceUnavailable: If the resource cannot be opened
            UnsupportedContent: If the MIME type or content is not delimited text
            UnderlyingFault: For malformed input (e.g. ragged rows)
        """
        delimiter = self._get_delimiter(resource)

        head = self._read_head(resource)
        if b"\x00" in head:
            raise UnsupportedContent(
                f"Resource {resource.uri} is not a text file (binary content detected)"
            )
        if not head.strip():
            logger.info(f"Resource {resource.uri} is empty")
            return

        parse_options = csv.ParseOptions(delimiter=delimiter, newlines_in_values=True)

        try:
            num_columns = self._count_columns(resource, parse_options)
            column_names = [f"f{i}" for i in range(num_columns)]

            read_options = self._read_options(column_names=column_names)
            convert_options = csv.ConvertOptions(
                column_types={name: pa.string() for name in column_names},
                strings_can_be_null=False,
            )

            remaining = offset
            with self._open_stream(resource) as stream:
                reader = csv.open_csv(
                    stream,
                    read_options=read_options,
                    parse_options=parse_options,
                    convert_options=convert_options,
                )
                for batch in reader:
                    if remaining >= batch.num_rows:
                        remaining -= batch.num_rows
                        continue
                    if remaining:
                        batch = batch.slice(remaining)
                        remaining = 0
                    columns = [column.to_pylist() for column in batch.columns]
                    yield from zip(*columns)
        except pa.ArrowInvalid as e:
            if "UTF8" in str(e) or "UTF-8" in str(e):
                raise UnsupportedContent(
                    f"Resource {resource.uri} is not valid {self.encoding} text: {e}"
                ) from e
            raise UnderlyingFault(f"Failed to parse {resource.uri}: {e}") from e
        except UnicodeDecodeError as e:
            raise UnsupportedContent(
                f"Resource {resource.uri} is not valid {self.encoding} text: {e}"
            ) from e

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_delimiter(self, resource: DatastoreResource) -> str:
        if self.delimiter:
            return self.delimiter
        try:
            return DELIMITERS_BY_MIME_TYPE[resource.mime_type]
        except KeyError:
            raise UnsupportedContent(
                f"Unsupported MIME type '{resource.mime_type}' for resource {resource.uri}"
            ) from None

    def _read_options(self, **kwargs) -> csv.ReadOptions:
        if self.block_size:
            kwargs["block_size"] = self.block_size
        return csv.ReadOptions(encoding=self.encoding, **kwargs)

    def _open_stream(self, resource: DatastoreResource) -> pa.NativeFile:
        """
        Open the resource as a pyarrow input stream.

        Plain paths are opened directly; URIs (file://, s3://, ...) are
        resolved with pyarrow.fs. Compression is detected from the extension.

        Raises:
            SourceUnavailable: If the resource cannot be opened
        """
        uri = resource.uri
        try:
            if "://" in uri:
                filesystem, path = pafs.FileSystem.from_uri(uri)
                return filesystem.open_input_stream(path)
            return pa.input_stream(uri)
        except (OSError, pa.ArrowException) as e:
            raise SourceUnavailable(f"Unable to open resource {uri}: {e}") from e

    def _read_head(self, resource: DatastoreResource) -> bytes:
        with self._open_stream(resource) as stream:
            try:
                return stream.read(SNIFF_BYTES)
            except (OSError, pa.ArrowException) as e:
                raise SourceUnavailable(f"Unable to read resource {resource.uri}: {e}") from e

    def _count_columns(
        self, resource: DatastoreResource, parse_options: csv.ParseOptions
    ) -> int:
        """Read the first block only to learn the number of columns."""
        with self._open_stream(resource) as stream:
            reader = csv.open_csv(
                stream,
                read_options=self._read_options(autogenerate_column_names=True),
                parse_options=parse_options,
            )
            return len(reader.schema)
