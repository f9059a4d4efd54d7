# =============================================================================
# In-Memory Row Storage
# =============================================================================
# Process-local datastore table, used for tests and dry runs.
# =============================================================================

from typing import List, Optional, Sequence, Tuple

from ..contracts import DatabaseTableInterface
from ..errors import UnderlyingFault
from ..models import TableSchema

__all__ = ["MemoryDatabaseTable"]


class MemoryDatabaseTable(DatabaseTableInterface):
    """Datastore table kept in a Python list."""

    def __init__(self):
        self._schema: Optional[TableSchema] = None
        self._rows: List[Tuple[str, ...]] = []

    def create_schema(self, schema: TableSchema) -> None:
        if self._schema is None:
            self._schema = schema

    def get_schema(self) -> Optional[TableSchema]:
        return self._schema

    def insert(self, row: Sequence[str]) -> None:
        if self._schema is None:
            raise UnderlyingFault("Cannot insert into a table without a schema")
        if len(row) != len(self._schema):
            raise UnderlyingFault(
                f"Row has {len(row)} values, table has {len(self._schema)} columns"
            )
        self._rows.append(tuple(row))

    def count(self) -> int:
        return len(self._rows)

    def retrieve_all(self) -> List[Tuple[str, ...]]:
        return list(self._rows)

    def drop(self) -> None:
        self._schema = None
        self._rows = []
