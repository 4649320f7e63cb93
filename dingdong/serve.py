"""Command line launcher that hosts the application on Uvicorn."""

from __future__ import annotations

import argparse
import logging
import signal
from typing import Sequence

import uvicorn
from pydantic import ValidationError

from dingdong.core.config import Settings
from dingdong.core.logging import configure_logging
from dingdong.main import create_app

logger = logging.getLogger("dingdong.serve")

DESCRIPTION = "Ding Dong - High-Performance HTTP Server"

EPILOG = """\
Features:
  - Request path containing 'dump' will print request details to console
  - Press Ctrl+C to shutdown and display metrics

Example:
  dingdong -h 0.0.0.0 -p 8080 -w 50 -q 20000 -b 200
"""


def build_parser(defaults: Settings) -> argparse.ArgumentParser:
    # -h is the listen host, so help is only available as --help.
    parser = argparse.ArgumentParser(
        prog="dingdong",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("--help", action="help", help="Show this help message and exit.")
    parser.add_argument("-h", "--host", default=defaults.host, help="Host to listen on.")
    parser.add_argument("-p", "--port", type=int, default=defaults.port, help="Port to listen on.")
    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        default=defaults.workers,
        help="Number of worker threads.",
    )
    parser.add_argument(
        "-q",
        "--queue-size",
        type=int,
        default=defaults.queue_size,
        help="Maximum queue size for body processing.",
    )
    parser.add_argument(
        "-b",
        "--max-body-size",
        type=int,
        default=defaults.max_body_size_mb,
        help="Maximum request body size in MB.",
    )
    parser.add_argument("--log-level", default=defaults.log_level, help="Application log level.")
    return parser


def parse_settings(argv: Sequence[str] | None = None) -> Settings:
    """Merge command line flags over environment-derived settings."""

    defaults = Settings()
    parser = build_parser(defaults)
    args = parser.parse_args(argv)
    try:
        return Settings(
            host=args.host,
            port=args.port,
            workers=args.workers,
            queue_size=args.queue_size,
            max_body_size_mb=args.max_body_size,
            log_level=args.log_level,
            graceful_shutdown_timeout=defaults.graceful_shutdown_timeout,
        )
    except ValidationError as exc:
        parser.error(str(exc))
        raise


def build_server(settings: Settings) -> uvicorn.Server:
    config = uvicorn.Config(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        lifespan="on",
        access_log=False,
        log_config=None,
        timeout_graceful_shutdown=settings.graceful_shutdown_timeout,
    )
    return uvicorn.Server(config)


def main(argv: Sequence[str] | None = None) -> None:
    settings = parse_settings(argv)
    configure_logging(settings.log_level)

    server = build_server(settings)
    logger.info("Starting server on %s", settings.listen_address)
    # Binding before the lifespan runs makes a listen failure fatal before
    # any worker is started. bind_socket logs the error and exits.
    sock = server.config.bind_socket()

    # Uvicorn re-raises the captured signal once it has shut down; route
    # SIGTERM through the same path as Ctrl+C so both end cleanly.
    signal.signal(signal.SIGTERM, signal.default_int_handler)
    try:
        server.run(sockets=[sock])
    except KeyboardInterrupt:
        pass
    finally:
        sock.close()


if __name__ == "__main__":
    main()
