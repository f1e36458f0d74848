"""Flask Extension Instances and Initialisation."""

from flask import Flask
from flask_compress import Compress

# Flask-Compress instance; compresses JSON/HTML/CSS/JS responses with gzip/brotli
compress = Compress()


def init_extensions(app: Flask) -> None:
    """Initialise Flask extension objects."""
    # The bundled web client is served from this process, so compress it too
    app.config.setdefault(
        "COMPRESS_MIMETYPES",
        [
            "text/html",
            "text/css",
            "text/xml",
            "text/plain",
            "application/json",
            "application/javascript",
            "image/svg+xml",
        ],
    )
    app.config.setdefault("COMPRESS_MIN_SIZE", 256)  # Don't compress tiny responses
    compress.init_app(app)
