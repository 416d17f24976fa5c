"""Run the HR ingest API with uvicorn: ``python -m hringest``."""

from __future__ import annotations

import uvicorn

from hringest.api.app import create_app
from hringest.core.config import AppSettings


def main() -> None:
    settings = AppSettings()
    uvicorn.run(create_app(settings), host=settings.server.host, port=settings.server.port)


if __name__ == "__main__":
    main()
