"""
Configuration module for cypherlink.

Uses pydantic-settings for environment-based configuration of the
Neo4j REST endpoint and the HTTP transport.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Client settings loaded from environment variables.

    The transaction itself imposes no timeout; http_timeout_seconds
    is applied by the HTTP transport.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===========================================
    # NEO4J CONFIGURATION
    # ===========================================
    neo4j_url: str = Field(
        default="http://localhost:7474",
        description="Neo4j HTTP base URL",
    )
    neo4j_user: str = Field(default="neo4j", description="Neo4j username")
    neo4j_password: str = Field(default="", description="Neo4j password")
    neo4j_transaction_path: str = Field(
        default="/db/data/transaction",
        description="Path of the transactional Cypher endpoint",
    )

    # ===========================================
    # HTTP TRANSPORT
    # ===========================================
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Socket/read timeout applied by the HTTP transport",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
