from __future__ import annotations

import argparse
import logging
import sys
import time

import httpx

from . import __version__
from .config import ConfigurationError, Settings, load_settings
from .services.output_writer import OutputError, open_output, write_records
from .services.query_builder import build_query
from .services.spacetrack_client import SpaceTrackClient, SpaceTrackError

logger = logging.getLogger(__name__)

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LOG_LEVELS = {
    "off": logging.CRITICAL + 10,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}
LOG_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)s] - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level_name: str) -> None:
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    formatter.converter = time.gmtime
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    logging.basicConfig(level=LOG_LEVELS[level_name], handlers=[handler], force=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tle_retriever", description="TLE Retriever Service")
    parser.add_argument("-c", "--config", required=True, help="settings file (.toml, .json, .yaml)")
    parser.add_argument(
        "-l",
        "--loglevel",
        choices=list(LOG_LEVELS),
        default="info",
        help="logging level off, error, warn, info, debug, trace",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run(settings: Settings, transport: httpx.BaseTransport | None = None) -> int:
    """Fetch the configured TLEs and write them out. Returns the record count."""
    logger.debug("Loaded settings: %r", settings)
    if settings.connection_retries:
        logger.debug("connection_retries=%d is not applied; the request is sent once", settings.connection_retries)

    output_path = settings.output_path
    logger.info("Creating output file %s", output_path)
    with open_output(output_path) as handle:
        query = build_query(settings.norad_ids, base_url=settings.spacetrack_base_url)
        logger.debug("Query: %s", query)
        records = SpaceTrackClient.from_settings(settings, transport=transport).fetch(query)
        count = write_records(handle, records)
    logger.info("Wrote %d TLE records to %s", count, output_path)
    return count


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        parser.print_help(sys.stderr)
        return 2
    args = parser.parse_args(argv)

    configure_logging(args.loglevel)
    logger.info("Starting up")

    try:
        settings = load_settings(args.config)
        run(settings)
    except (ConfigurationError, SpaceTrackError, OutputError) as exc:
        logger.error("%s", exc)
        print(f"tle_retriever: error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
