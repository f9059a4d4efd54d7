# =============================================================================
# SQL Row Storage
# =============================================================================
# Datastore table backed by any SQLAlchemy engine (PostgreSQL in production,
# SQLite in tests). Every column is TEXT; an internal record_number column
# keeps insertion order and lets a resumed import trust count().
# =============================================================================

import logging
import re
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

from ..contracts import DatabaseTableInterface
from ..errors import UnderlyingFault
from ..models import SchemaField, TableSchema
from ..table_utils import RECORD_NUMBER_COLUMN

__all__ = ["SqlDatabaseTable", "RECORD_NUMBER_COLUMN"]

logger = logging.getLogger(__name__)

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]{0,63}$")


def _quote(identifier: str) -> str:
    """
    Quote a validated SQL identifier.

    Raises:
        ValueError: If the identifier is not a plain SQL identifier
    """
    if not _IDENTIFIER_PATTERN.match(identifier):
        raise ValueError(
            f"Invalid identifier: {identifier}. Must match pattern: {_IDENTIFIER_PATTERN.pattern}"
        )
    return f'"{identifier}"'


class SqlDatabaseTable(DatabaseTableInterface):
    """
    Datastore table stored in a relational database.

    Attributes:
        engine: SQLAlchemy engine
        table_name: Unquoted table name (plain SQL identifier)

    Example:
        >>> engine = create_engine("sqlite:///datastore.db")
        >>> table = SqlDatabaseTable(engine, "datastore_1")
        >>> table.create_schema(build_table_schema(["id", "name"]))
        >>> table.insert(("1", "Alice"))
        >>> table.count()
        1
    """

    def __init__(self, engine: Engine, table_name: str):
        _quote(table_name)
        self.engine = engine
        self.table_name = table_name
        self._schema: Optional[TableSchema] = None
        self._next_record: Optional[int] = None

    def __repr__(self) -> str:
        return f"SqlDatabaseTable(table_name={self.table_name!r})"

    def table_exists(self) -> bool:
        return inspect(self.engine).has_table(self.table_name)

    def create_schema(self, schema: TableSchema) -> None:
        """
        Create the table with one TEXT column per schema field.

        Idempotent: an existing table is left untouched. Schemas built by
        build_table_schema never contain the internal record_number column.
        """
        columns = [f"{_quote(RECORD_NUMBER_COLUMN)} INTEGER PRIMARY KEY"]
        columns.extend(f"{_quote(name)} TEXT" for name in schema.column_names)

        sql = f"CREATE TABLE IF NOT EXISTS {_quote(self.table_name)} ({', '.join(columns)})"
        with self.engine.connect() as conn:
            conn.execute(text(sql))
            conn.commit()

        self._schema = schema
        logger.info(f"Created datastore table {self.table_name} with {len(schema)} columns")

    def get_schema(self) -> Optional[TableSchema]:
        """
        Return the table schema, or None if the table does not exist.

        Tables created by another process are reflected; their field
        descriptions are empty.
        """
        if not self.table_exists():
            self._schema = None
            return None
        if self._schema is None:
            columns = inspect(self.engine).get_columns(self.table_name)
            self._schema = TableSchema(
                fields={
                    column["name"]: SchemaField(name=column["name"])
                    for column in columns
                    if column["name"] != RECORD_NUMBER_COLUMN
                }
            )
        return self._schema

    def insert(self, row: Sequence[str]) -> None:
        # A cached schema implies the table exists
        schema = self._schema if self._schema is not None else self.get_schema()
        if schema is None:
            raise UnderlyingFault(f"Table {self.table_name} does not exist")
        if len(row) != len(schema):
            raise UnderlyingFault(
                f"Row has {len(row)} values, table {self.table_name} has {len(schema)} columns"
            )

        if self._next_record is None:
            self._next_record = self._max_record_number() + 1

        names = [RECORD_NUMBER_COLUMN] + schema.column_names
        placeholders = [f":p{i}" for i in range(len(names))]
        params = {f"p{i}": value for i, value in enumerate([self._next_record, *row])}
        sql = (
            f"INSERT INTO {_quote(self.table_name)} "
            f"({', '.join(_quote(name) for name in names)}) "
            f"VALUES ({', '.join(placeholders)})"
        )
        with self.engine.connect() as conn:
            conn.execute(text(sql), params)
            conn.commit()
        self._next_record += 1

    def count(self) -> int:
        if not self.table_exists():
            return 0
        with self.engine.connect() as conn:
            result = conn.execute(text(f"SELECT COUNT(*) FROM {_quote(self.table_name)}"))
            return int(result.scalar() or 0)

    def retrieve_all(self) -> List[Tuple[str, ...]]:
        schema = self.get_schema()
        if schema is None:
            return []
        columns = ", ".join(_quote(name) for name in schema.column_names)
        sql = (
            f"SELECT {columns} FROM {_quote(self.table_name)} "
            f"ORDER BY {_quote(RECORD_NUMBER_COLUMN)}"
        )
        with self.engine.connect() as conn:
            return [tuple(row) for row in conn.execute(text(sql))]

    def drop(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text(f"DROP TABLE IF EXISTS {_quote(self.table_name)}"))
            conn.commit()
        self._schema = None
        self._next_record = None
        logger.info(f"Dropped datastore table {self.table_name}")

    def _max_record_number(self) -> int:
        sql = (
            f"SELECT MAX({_quote(RECORD_NUMBER_COLUMN)}) "
            f"FROM {_quote(self.table_name)}"
        )
        with self.engine.connect() as conn:
            return int(conn.execute(text(sql)).scalar() or 0)
