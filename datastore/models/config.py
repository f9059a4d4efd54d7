# =============================================================================
# Configuration Models Module
# =============================================================================
# Provides the Pydantic Settings model for import job defaults.
# Service connections (PostgreSQL, MongoDB) are configured on the Dagster
# resources in services/dagster/import_pipelines/definitions.py.
# =============================================================================

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["ImportSettings"]


# =============================================================================
# Import Settings
# =============================================================================

class ImportSettings(BaseSettings):
    """
    Defaults applied to newly constructed import jobs.

    Maps environment variables with prefix "DATASTORE_":
    - DATASTORE_TIME_LIMIT → time_limit
    - DATASTORE_CHECKPOINT_ROWS → checkpoint_rows
    - DATASTORE_CSV_ENCODING → csv_encoding

    Attributes:
        time_limit: Per-run time budget in seconds (default: None = unbounded)
        checkpoint_rows: Rows stored between time budget checks (default: 100)
        csv_encoding: Source encoding handed to the CSV parser (default: "utf8")
    """

    time_limit: Optional[int] = Field(None, ge=0, validation_alias="DATASTORE_TIME_LIMIT", description="Per-run time budget in seconds")
    checkpoint_rows: int = Field(100, ge=1, validation_alias="DATASTORE_CHECKPOINT_ROWS", description="Rows stored between time budget checks")
    csv_encoding: str = Field("utf8", validation_alias="DATASTORE_CSV_ENCODING", description="Source encoding for CSV resources")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore unrelated env vars from shared .env files
        populate_by_name=True,
    )

