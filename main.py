#!/usr/bin/env python3
from __future__ import annotations

"""
Main entry point for the torrent_streams CLI.

This module keeps the pace brisk: load the config, fetch or read the
candidates, rank them by taste and print the streams as JSON.
"""

import argparse
import json
import logging
import sys
from typing import Any, List

from torrent_streams.config import AppConfig, ConfigError, ConfigLoader
from torrent_streams.description import DescriptionComposer
from torrent_streams.finder import StreamFinder
from torrent_streams.locales import DEFAULT_TABLES
from torrent_streams.models import TorrentCandidate, UserProfile
from torrent_streams.source import TorrentSourceClient, load_candidates_file
from torrent_streams.streams import StreamRecordBuilder, StreamService


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    """
    Build and parse the CLI arguments.

    Returns
    -------
    argparse.Namespace
        The parsed arguments, ready for a night out with the main routine.
    """

    parser = argparse.ArgumentParser(description="Rank torrents by preference and print playable stream records.")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--candidates", help="Path to a JSON torrent listing to rank offline.")
    target.add_argument("--imdb-id", help="Content id to look up through the configured torrent source.")
    parser.add_argument("--config", default="config.json", help="Path to the JSON configuration file.")

    parser.add_argument("--season", type=int, help="Season number for episodes.")
    parser.add_argument("--episode", type=int, help="Episode number for episodes.")
    parser.add_argument("--token", required=True, help="Device/auth token embedded in the play URLs.")
    parser.add_argument("--limit", type=int, default=5, help="How many streams to print (default: 5).")

    parser.add_argument("--addon-url", help="Override the addon base URL for this run.")
    parser.add_argument("--source-url", help="Override the torrent source endpoint for this run.")
    parser.add_argument("--language", help="Preferred language (en/hu).")
    parser.add_argument(
        "--resolution",
        dest="resolutions",
        action="append",
        help="Preferred resolution, repeat for more (e.g. --resolution 1080p --resolution 2160p).",
    )

    parser.add_argument("--debug", action="store_true", help="Enable debug logging regardless of config.")
    return parser.parse_args(argv)


def configure_logging(config: AppConfig, debug: bool) -> None:
    """
    Funnel the logging level into place.

    Parameters
    ----------
    config : AppConfig
        Freshly loaded configuration with its chosen verbosity.
    debug : bool
        When ``True`` we skip straight to DEBUG.
    """

    level_name = "DEBUG" if debug else config.logging.level.upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def collect_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Gather CLI overrides into a single place."""

    return {
        "addon_url": args.addon_url,
        "source_url": args.source_url,
        "language": args.language,
        "resolutions": args.resolutions,
    }


def build_finder(config: AppConfig) -> StreamFinder:
    """Wire the tables, composer, builder, service and optional source client together."""

    composer = DescriptionComposer(DEFAULT_TABLES.validate())
    service = StreamService(StreamRecordBuilder(config.addon.url, composer))
    source_client = TorrentSourceClient(config.source) if config.source else None
    return StreamFinder(service, source_client)


def main(argv: List[str] | None = None) -> None:
    """
    Run the CLI workflow.

    Steps
    -----
    1. Parse CLI arguments and load config.
    2. Collect candidates from a file or the torrent source.
    3. Rank, build stream records, print them.
    """

    args = parse_args(argv)

    loader = ConfigLoader(args.config)
    try:
        config = loader.load()
        config = ConfigLoader.apply_overrides(config, collect_overrides(args))
        profile = UserProfile.from_config(config.profile)
    except ConfigError as exc:
        raise SystemExit(str(exc)) from exc

    configure_logging(config, args.debug)

    try:
        finder = build_finder(config)
    except ConfigError as exc:
        raise SystemExit(str(exc)) from exc

    candidates: List[TorrentCandidate]
    if args.candidates:
        logging.info("Reading candidates from: %s", args.candidates)
        try:
            candidates = load_candidates_file(args.candidates)
        except (OSError, json.JSONDecodeError) as exc:
            raise SystemExit(f"ERROR: Could not read candidates: {exc}") from exc
    else:
        if config.source is None:
            raise SystemExit("ERROR: No torrent source configured; pass --source-url or --candidates.")
        logging.info("Searching torrent source for: %s", args.imdb_id)
        candidates = finder.find_candidates(args.imdb_id, season=args.season, episode=args.episode)

    if not candidates:
        logging.error("No usable candidates. Check the listing or the torrent source.")
        raise SystemExit("ERROR: No candidates found.")

    streams = finder.pick_streams(
        candidates,
        profile,
        args.token,
        season=args.season,
        episode=args.episode,
        limit=args.limit,
    )
    logging.info("Built %d streams from %d candidates", len(streams), len(candidates))

    json.dump([stream.to_dict() for stream in streams], sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
