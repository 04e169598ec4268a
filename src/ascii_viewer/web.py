"""Upload form + converter endpoint.

Run with ``ascii-viewer serve`` or ``flask --app ascii_viewer.web run``.
"""

import argparse
import logging
import os
import sys
from typing import Optional, Sequence
from urllib.parse import quote

from flask import Flask, render_template, request
from werkzeug.utils import secure_filename

from .errors import AsciiViewerError, NoImageProvided
from .image_to_ascii import ConversionRequest, convert

LOG = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080
FALLBACK_FILENAME = "image.png"


def output_stem(filename: Optional[str]) -> str:
    """Sanitised stem used for the .txt and .html download names."""
    safe = secure_filename(filename or "") or FALLBACK_FILENAME
    stem, _ = os.path.splitext(safe)
    return stem or os.path.splitext(FALLBACK_FILENAME)[0]


def _flag(name: str) -> bool:
    return request.form.get(name, "") == "true"


def data_uri(mime: str, payload: str) -> str:
    return f"data:{mime};charset=utf-8,{quote(payload, safe='')}"


def create_app() -> Flask:
    app = Flask(__name__)

    @app.errorhandler(AsciiViewerError)
    def conversion_failed(e: AsciiViewerError):
        LOG.warning("Upload rejected: %s", e)
        return str(e), 400, {"Content-Type": "text/plain; charset=utf-8"}

    @app.route("/")
    def index():
        return render_template("index.html")

    @app.route("/upload", methods=["POST"])
    def upload():
        image = request.files.get("image")
        if image is None:
            raise NoImageProvided()
        data = image.read()
        if not data:
            raise NoImageProvided()

        theme = "light" if request.form.get("theme") == "light" else "dark"
        stem = output_stem(image.filename)
        LOG.info("Converting %s (%d bytes, theme=%s)", stem, len(data), theme)

        result = convert(
            ConversionRequest(
                data=data,
                theme=theme,
                detailed=_flag("detailed"),
                full_resolution=_flag("full_resolution"),
            )
        )

        return render_template(
            "result.html",
            viewer=result.html,
            txt_href=data_uri("text/plain", result.text),
            html_href=data_uri("text/html", result.html),
            txt_filename=f"{stem}.txt",
            html_filename=f"{stem}.html",
        )

    return app


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Serve the image-to-ASCII upload form")
    parser.add_argument("--host", default=DEFAULT_HOST, help="Interface to bind")
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("PORT", DEFAULT_PORT)),
        help="Port to listen on (default: $PORT or 8080)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: INFO)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, args.log_level),
        format="%(levelname)s: %(message)s",
    )

    LOG.info("Starting server at http://%s:%d", args.host, args.port)
    create_app().run(host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
