"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class ServerConfig(BaseSettings):
    """HTTP server configuration."""

    model_config = {"env_prefix": "HRINGEST_SERVER_", "populate_by_name": True}

    host: str = "0.0.0.0"
    port: int = Field(5000, validation_alias=AliasChoices("PORT", "HRINGEST_SERVER_PORT"))


class UploadConfig(BaseSettings):
    """CSV upload gating."""

    model_config = {"env_prefix": "HRINGEST_UPLOAD_", "populate_by_name": True}

    max_file_size: int = Field(
        10 * 1024 * 1024,
        validation_alias=AliasChoices("MAX_FILE_SIZE", "HRINGEST_UPLOAD_MAX_FILE_SIZE"),
    )
    allowed_mime_types: list[str] = ["text/csv", "application/vnd.ms-excel"]
    field_name: str = "file"
    require_headers: bool = False  # reject uploads missing a required column


class DynamoDBConfig(BaseSettings):
    """DynamoDB configuration for the record and audit stores."""

    model_config = {"env_prefix": "HRINGEST_DYNAMO_", "populate_by_name": True}

    table_suffix: str = ""  # "-dev", "-test", or "" for prod
    region: str = "us-east-1"
    endpoint_url: str | None = Field(
        None,
        validation_alias=AliasChoices("DATABASE_URL", "HRINGEST_DYNAMO_ENDPOINT_URL"),
    )
    employee_table: str = "hringest-employees"
    audit_table: str = "hringest-audit-log"


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "HRINGEST_", "populate_by_name": True}

    environment: Literal["development", "production", "test"] = Field(
        "development",
        validation_alias=AliasChoices("APP_ENV", "HRINGEST_ENVIRONMENT"),
    )
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"
    store_backend: Literal["memory", "dynamodb"] = "memory"
    audit_duplicates: bool = False

    server: ServerConfig = Field(default_factory=ServerConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    dynamodb: DynamoDBConfig = Field(default_factory=DynamoDBConfig)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"
