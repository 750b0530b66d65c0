"""Command-line entrypoint: ``task-tracker --host 0.0.0.0 --port 8080``."""

from __future__ import annotations

import argparse
import logging

import uvicorn

from .config.settings import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Send all records to stderr at ``level``; call once before serving."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, force=True)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Serve the task tracker HTTP API.")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument("--log-level", default=settings.log_level)
    parser.add_argument("--reload", action="store_true", help="Restart on code changes.")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    logging.getLogger(__name__).info(
        "server event=starting host=%s port=%s", args.host, args.port
    )
    uvicorn.run(
        "task_tracker_api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
