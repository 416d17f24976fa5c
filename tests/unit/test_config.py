"""Tests for configuration defaults and env overrides."""

from __future__ import annotations

from hringest.core.config import AppSettings, DynamoDBConfig, ServerConfig, UploadConfig


def test_default_settings(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    settings = AppSettings()
    assert settings.environment == "development"
    assert settings.store_backend == "memory"
    assert settings.audit_duplicates is False
    assert not settings.is_production


def test_upload_config_defaults(monkeypatch):
    monkeypatch.delenv("MAX_FILE_SIZE", raising=False)
    config = UploadConfig()
    assert config.max_file_size == 10 * 1024 * 1024
    assert config.field_name == "file"
    assert "text/csv" in config.allowed_mime_types


def test_plain_env_names_are_recognized(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("MAX_FILE_SIZE", "2048")
    monkeypatch.setenv("DATABASE_URL", "http://localhost:4566")
    monkeypatch.setenv("APP_ENV", "production")

    settings = AppSettings()

    assert settings.server.port == 8080
    assert settings.upload.max_file_size == 2048
    assert settings.dynamodb.endpoint_url == "http://localhost:4566"
    assert settings.is_production


def test_prefixed_env_names(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.setenv("HRINGEST_SERVER_PORT", "9000")
    monkeypatch.setenv("HRINGEST_DYNAMO_TABLE_SUFFIX", "-dev")
    monkeypatch.setenv("HRINGEST_STORE_BACKEND", "dynamodb")

    assert ServerConfig().port == 9000
    assert DynamoDBConfig().table_suffix == "-dev"
    assert AppSettings().store_backend == "dynamodb"
