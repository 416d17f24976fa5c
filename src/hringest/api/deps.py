"""FastAPI dependencies resolving services wired onto ``app.state``."""

from __future__ import annotations

from fastapi import Request

from hringest.core.config import AppSettings
from hringest.pipeline.service import IngestService
from hringest.pipeline.stats import StatsService


def get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def get_ingest_service(request: Request) -> IngestService:
    return request.app.state.ingest_service


def get_stats_service(request: Request) -> StatsService:
    return request.app.state.stats_service
