"""
Chunking configuration settings.

Window size, overlap and boundary heuristics for splitting articles,
plus the ingestion-time content validation threshold.

Dependencies: pydantic, pydantic_settings
System role: Article splitting configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChunkingSettings(BaseSettings):
    """Article chunking configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CHUNKING_",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(default=1000, description="Window size in characters", gt=0)
    chunk_overlap: int = Field(
        default=200,
        description="Characters shared between consecutive chunks",
        ge=0,
    )
    boundary_ratio: float = Field(
        default=0.5,
        description="A sentence/paragraph break must fall past this share of the window",
        gt=0.0,
        le=1.0,
    )
    min_content_length: int = Field(
        default=100,
        description="Minimum article length accepted for ingestion",
    )
    id_strategy: str = Field(
        default="title",
        description="Chunk id derivation: 'title' (title + index) or 'content_hash'",
    )
