# =============================================================================
# Table Schema Models
# =============================================================================
# Ordered field metadata for a datastore table.
# =============================================================================

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["SchemaField", "TableSchema"]


class SchemaField(BaseModel):
    """
    Metadata for a single column of a datastore table.

    Every column is created as text; type inference is left to consumers.

    Attributes:
        name: Sanitized storage identifier
        type: Storage type (always "text" on creation)
        description: Original header text with line breaks collapsed
    """

    name: str = Field(..., description="Sanitized storage identifier")
    type: Literal["text"] = Field("text", description="Storage type")
    description: str = Field(default="", description="Original header text")

    model_config = ConfigDict(frozen=True)


class TableSchema(BaseModel):
    """
    Ordered mapping of sanitized column names to field metadata.

    Attributes:
        fields: Column name -> SchemaField, in file order
    """

    fields: dict[str, SchemaField] = Field(default_factory=dict)

    @property
    def column_names(self) -> list[str]:
        return list(self.fields)

    def __len__(self) -> int:
        return len(self.fields)
