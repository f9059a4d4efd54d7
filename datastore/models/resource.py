# =============================================================================
# Resource Model
# =============================================================================
# Immutable descriptor of the file an import job reads from.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["DatastoreResource"]

DEFAULT_MIME_TYPE = "text/csv"


class DatastoreResource(BaseModel):
    """
    Descriptor of a tabular resource to import.

    The importer never looks inside the descriptor beyond handing it to the
    parser; it is created by the caller and never mutated.

    Attributes:
        id: Resource identifier (ints are accepted and stored as strings)
        uri: Local path, ``file://`` URI or any URI pyarrow.fs can resolve
        mime_type: Declared content type (default: "text/csv")

    Example:
        >>> resource = DatastoreResource(id=1, uri="/data/countries.csv")
        >>> resource.id
        '1'
    """

    id: str = Field(..., description="Resource identifier")
    uri: str = Field(..., min_length=1, description="Location of the resource")
    mime_type: str = Field(DEFAULT_MIME_TYPE, description="Declared MIME type")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "1",
                "uri": "s3://landing-zone/batch_001/countries.csv",
                "mime_type": "text/csv",
            }
        },
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        if isinstance(v, bool) or v is None:
            raise ValueError("Resource id must be a string or integer")
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("mime_type")
    @classmethod
    def normalize_mime_type(cls, v: str) -> str:
        # Drop parameters such as "; charset=utf-8"
        return v.split(";", 1)[0].strip().lower() or DEFAULT_MIME_TYPE
