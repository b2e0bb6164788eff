"""Command line entrypoint that serves the news search page with Uvicorn."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

import uvicorn

from newsdesk.api.app import create_app
from newsdesk.config import DEFAULT_ENV_PATH, LISTEN_HOST, LISTEN_PORT, NewsConfig, load_env_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="newsdesk",
        description="Serve a news search page backed by NewsAPI.",
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help=(
            f"Environment file holding NEWS_API_KEY. Defaults to an optional {DEFAULT_ENV_PATH}; "
            "a file named here must exist."
        ),
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Load configuration and run the server until interrupted."""

    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        load_env_file(args.env_file, required=args.env_file is not None)
        config = NewsConfig.from_env()
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Could not load configuration: %s", exc)
        sys.exit(1)

    if not config.has_credentials:
        logger.warning("NEWS_API_KEY is not set; searches will fail until it is configured")

    app = create_app(config)

    logger.info("Server listening on port %d", LISTEN_PORT)
    uvicorn.run(app, host=LISTEN_HOST, port=LISTEN_PORT)


if __name__ == "__main__":
    main()
