"""Command line entry point: ``python -m passkeep``."""

from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from passkeep import __version__
from passkeep.app import create_app
from passkeep.core.config import ConfigError, load_settings
from passkeep.core.logging import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="passkeep - personal credential vault over HTTP")
    parser.add_argument("--config", help="YAML config file (default: $PASSKEEP_CONFIG or config.yaml)")
    parser.add_argument("--host", help="Bind host (overrides server_host)")
    parser.add_argument("--port", type=int, help="Bind port (overrides server_port)")
    parser.add_argument("--version", action="version", version=f"passkeep {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        sys.stderr.write(f"failed to init config: {exc}\n")
        return 1

    configure_logging(settings.log_level)
    app = create_app(settings)
    host = args.host or settings.server_host
    port = args.port or settings.server_port
    logger.info("serving %s on %s:%d", settings.file_path, host, port)
    # uvicorn handles SIGINT/SIGTERM and runs the lifespan shutdown (final flush)
    uvicorn.run(app, host=host, port=port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
