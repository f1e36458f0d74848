"""Entry point for the Flowl server.

Builds the application with the broker connection and reconciler running,
then serves it with Werkzeug. Used by the ``flowl`` console script.
"""
from __future__ import annotations

import logging

from app import create_app
from app.config import load_config


def main() -> int:
    config = load_config()
    app = create_app(bootstrap_runtime=True)

    logging.info("Starting server on %s:%s", config.host, config.port)

    try:
        app.run(
            host=config.host,
            port=config.port,
            debug=config.debug,
            use_reloader=False,
            threaded=True,
        )
        logging.info("Server stopped.")
        return 0
    except KeyboardInterrupt:
        logging.info("Server stopped by user.")
        return 0
    except Exception as exc:  # pragma: no cover - top-level runtime errors
        logging.exception("ERROR: Failed to start server: %s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
