"""The pet shop web application and its command."""

import argparse
import logging
import time
from typing import Optional, Sequence

from flask import Flask, g, request
from pymongo.errors import PyMongoError

from .config import connect_db, get_database
from .controllers import create_api
from .repository import Store

DEFAULT_PORT = 3000
CORS_ALLOW_METHODS = "GET,POST,HEAD,PUT,DELETE,PATCH"

logger = logging.getLogger(__name__)


def _install_request_log(app: Flask) -> None:
    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.get("request_started")
        latency = "-" if started is None else f"{(time.perf_counter() - started) * 1000:.3f}ms"
        logger.info(
            "%s | %s | %s | %s | %s",
            response.status_code,
            latency,
            request.remote_addr,
            request.method,
            request.path,
        )
        return response


def _install_cors(app: Flask) -> None:
    @app.before_request
    def _preflight():
        if request.method == "OPTIONS" and request.headers.get("Access-Control-Request-Method"):
            response = app.make_response(("", 204))
            response.headers["Access-Control-Allow-Methods"] = CORS_ALLOW_METHODS
            requested = request.headers.get("Access-Control-Request-Headers")
            if requested:
                response.headers["Access-Control-Allow-Headers"] = requested
            return response
        return None

    @app.after_request
    def _allow_origin(response):
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.vary.add("Origin")
        return response


def create_app(store: Store) -> Flask:
    """Application serving the ``/api`` routes backed by ``store``."""
    app = Flask(__name__)
    app.json.sort_keys = False
    _install_request_log(app)
    _install_cors(app)
    app.register_blueprint(create_api(store), url_prefix="/api")
    return app


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Connect to the database and serve the API."""
    parser = argparse.ArgumentParser(prog="petshop", description="Pet shop API server.")
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    try:
        client = connect_db()
    except (ValueError, PyMongoError) as err:
        logger.error("%s", err)
        return 1

    try:
        app = create_app(Store(get_database(client)))
        logger.info("Server is running on http://localhost:%d", args.port)
        app.run(host=args.host, port=args.port)
    except OSError as err:
        logger.error("Gagal menjalankan server: %s", err)
        return 1
    finally:
        client.close()
    return 0