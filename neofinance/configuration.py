"""Mini README: Centralised configuration models and helpers for NeoFinance.

Structure:
    * NeoFinanceSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read environment variables such as the MongoDB
    connection string, the listening port, and the TLS policy used against the
    document store. Variables use the ``NEOFINANCE_`` prefix; the bare
    ``MONGODB_URI`` and ``PORT`` names used by hosting platforms are accepted
    as well. The configuration is cached so validation runs once per process.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class NeoFinanceSettings(BaseSettings):
    """Runtime configuration for the NeoFinance backend and CLI."""

    model_config = SettingsConfigDict(
        env_prefix="NEOFINANCE_",
        env_file=".env",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    service_name: str = Field(
        "expense-tracker",
        description="Name reported by the liveness endpoint.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        8080,
        description="Port the HTTP service exposes.",
        ge=1,
        le=65535,
        validation_alias=AliasChoices("NEOFINANCE_INTERFACE_PORT", "PORT", "interface_port"),
    )
    storage_backend: Literal["mongo", "memory"] = Field(
        "mongo",
        description="Persistence backend; 'memory' keeps transactions in-process only.",
    )
    mongodb_uri: Optional[str] = Field(
        None,
        description="MongoDB connection string. Required for the 'mongo' backend.",
        validation_alias=AliasChoices("NEOFINANCE_MONGODB_URI", "MONGODB_URI", "mongodb_uri"),
    )
    database_name: str = Field("neofinance", description="MongoDB database name.")
    collection_name: str = Field("transactions", description="MongoDB collection name.")
    tls_allow_invalid_certificates: bool = Field(
        False,
        description=(
            "Skip server certificate verification when connecting to MongoDB."
            " Only intended for development clusters with self-signed certificates."
        ),
    )
    read_timeout_seconds: float = Field(
        10.0, gt=0, description="Time budget for a single storage read."
    )
    write_timeout_seconds: float = Field(
        5.0, gt=0, description="Time budget for a single storage write or delete."
    )

    @field_validator("mongodb_uri", mode="before")
    @classmethod
    def _blank_uri_is_unset(cls, value: Optional[str]) -> Optional[str]:
        """Treat empty connection strings the same as a missing variable."""

        if isinstance(value, str) and not value.strip():
            return None
        return value


@lru_cache()
def get_settings() -> NeoFinanceSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return NeoFinanceSettings()
