"""
Embedding provider configuration settings.

Selects the embedding model provider and controls batching, pacing
between batches and retry of transient provider failures.

Dependencies: pydantic, pydantic_settings
System role: Embedding generation configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmbeddingSettings(BaseSettings):
    """Embedding model provider configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EMBEDDING_",
        case_sensitive=False,
        extra="ignore",
    )

    provider: str = Field(
        default="google",
        description="Embedding provider: 'google' (Gemini) or 'bedrock' (Amazon Titan)",
    )
    model: str = Field(
        default="models/gemini-embedding-001",
        description="Provider model ID",
    )
    dimension: int = Field(
        default=1536,
        description="Embedding vector dimension shared by every stored record",
    )
    google_api_key: str | None = Field(
        default=None,
        description="Google API key (falls back to GOOGLE_API_KEY)",
    )
    aws_region: str = Field(default="us-east-1", description="AWS region for Bedrock")

    batch_size: int = Field(default=10, description="Chunks submitted per provider call", ge=1)
    pacing: str = Field(
        default="fixed",
        description="Inter-batch pacing policy: 'fixed' or 'token_bucket'",
    )
    batch_delay_seconds: float = Field(
        default=0.1,
        description="Delay between batches for the fixed policy",
        ge=0.0,
    )
    tokens_per_second: float = Field(
        default=10.0,
        description="Batch refill rate for the token bucket policy",
        gt=0.0,
    )
    bucket_capacity: int = Field(
        default=1,
        description="Burst size for the token bucket policy",
        ge=1,
    )
    retry_attempts: int = Field(
        default=1,
        description="Attempts per batch before failing (1 disables retry)",
        ge=1,
    )
