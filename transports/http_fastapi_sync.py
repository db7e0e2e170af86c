"""Serve the parse API with uvicorn.

``INTERPOLATE_HOST`` / ``INTERPOLATE_PORT`` choose the bind address and
``INTERPOLATE_RELOAD=1`` turns on auto-reload for local development.
"""

from __future__ import annotations

import os

import uvicorn

from interpolate.main import create_app

app = create_app()


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


if __name__ == "__main__":  # pragma: no cover - manual run helper
    uvicorn.run(
        "transports.http_fastapi_sync:app",
        host=os.getenv("INTERPOLATE_HOST", "127.0.0.1"),
        port=int(os.getenv("INTERPOLATE_PORT", "8000")),
        reload=_env_flag("INTERPOLATE_RELOAD"),
    )
