"""Application entry point for the transaction viewer server."""

from __future__ import annotations

import os

import uvicorn

from tx_viewer.config.settings import AppConfig


def main() -> None:
    """Start the transaction viewer server."""
    config = AppConfig()
    reload = os.getenv("TXVIEWER_RELOAD", "false").lower() in ("1", "true", "yes")
    uvicorn.run(
        "tx_viewer.api.app:create_app",
        factory=True,
        host=config.server.host,
        port=config.server.port,
        reload=reload,
        log_level="debug" if config.debug else "info",
    )


if __name__ == "__main__":
    main()
