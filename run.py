"""Entry point for the Kennel Dog Roster API.

Launches the FastAPI application with Uvicorn.  Host and port are read
from the ``KENNEL_HOST`` and ``KENNEL_PORT`` environment variables;
the rest of the configuration (database path, log level...) is read by
``kennel_api.app.core.config``.

Usage:
    python run.py
"""
import logging
import os

from uvicorn import Config, Server

from kennel_api.app.main import app


def main() -> None:
    """Serve the API until interrupted."""
    host = os.getenv("KENNEL_HOST", "0.0.0.0")
    port = int(os.getenv("KENNEL_PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level="info")
    server = Server(config)
    logging.getLogger(__name__).info("Starting Kennel Dog Roster API on %s:%s", host, port)
    server.run()


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
