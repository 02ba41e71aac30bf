"""
Vector store configuration settings.

Selects the document collection backend and the defaults applied to
similarity search and batched writes.

Dependencies: pydantic, pydantic_settings
System role: Vector storage and retrieval configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (in-memory for dev, SQL for persistence)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    backend: str = Field(
        default="sql",
        description="Document collection backend: 'memory' or 'sql'",
    )
    collection_name: str = Field(
        default="article_embeddings",
        description="Collection holding vector records",
    )

    default_limit: int = Field(default=10, description="Maximum results per search", ge=1)
    default_threshold: float = Field(
        default=0.7,
        description="Minimum cosine similarity for a search hit",
    )
    write_batch_size: int = Field(
        default=500,
        description="Records written per store transaction during ingestion",
        ge=1,
    )
