#!/usr/bin/env python3
"""
Endpoint Watch CLI - Runs one change-detection cycle and exits.

Usage:
    endpoint-watcher [--env-file .env] [--state-file PATH] [--dry-run] [-v]

Exit codes:
    0: Run completed (first run, no change, or change notified)
    3: FAIL - Configuration, fetch, parse or state save error
"""

import argparse
import logging
import os
import sys
from typing import List, Mapping, Optional

from dotenv import load_dotenv

from endpoint_watcher.adapters.fetchers import AdapterRequestsFetcher
from endpoint_watcher.adapters.notifiers import (
    AdapterStdoutNotifier,
    AdapterTelegramNotifier,
)
from endpoint_watcher.adapters.stores import AdapterJsonFileStore
from endpoint_watcher.application import WatchUseCase
from endpoint_watcher.config import load_config
from endpoint_watcher.core import report
from endpoint_watcher.core.errors import ConfigError, NotificationError, WatchError
from endpoint_watcher.core.ports import Notifier

EXIT_OK = 0
EXIT_FAIL = 3
EXIT_INTERRUPTED = 130

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """
    Setup logging configuration.

    Args:
        verbose: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="endpoint-watcher",
        description="Report added/removed values of a JSON API or HTML page",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Configuration is read from environment variables:
  TARGET_ENDPOINT, TELEGRAM_BOT_TOKEN, TELEGRAM_CHAT_ID, TRACK_PATH (required)
  REQUEST_HEADERS, STATE_FILE, FETCH_TIMEOUT (optional)

Exit codes:
  0  - Run completed
  3  - Fatal error (config, fetch, parse, state save)

Examples:
  TRACK_PATH='events.#.event_date' endpoint-watcher
  TRACK_PATH='.title a@href' endpoint-watcher --env-file .env --dry-run
        """,
    )

    parser.add_argument(
        "--env-file",
        default=None,
        help="Load environment variables from this dotenv file first",
    )

    parser.add_argument(
        "--state-file",
        default=None,
        help="Path to the baseline file (overrides STATE_FILE)",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print notifications instead of sending them and don't save the baseline",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging (DEBUG level)",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code: 0 (completed), 3 (FAIL), 130 (interrupted)
    """
    args = build_parser().parse_args(argv)

    setup_logging(verbose=args.verbose)

    if args.env_file:
        if not load_dotenv(args.env_file, override=False):
            logger.warning("No variables loaded from env file: %s", args.env_file)

    if args.dry_run:
        logger.info("Dry-run mode: notifications go to stdout, baseline not saved")

    try:
        config = load_config()
    except ConfigError as e:
        logger.error("bad config: %s", e)
        fallback = _fallback_notifier(os.environ, args.dry_run)
        if fallback is not None:
            _notify_quietly(fallback, report.format_failure("bad config", e))
        return EXIT_FAIL

    state_file = args.state_file or config.state_file
    notifier: Notifier
    if args.dry_run:
        notifier = AdapterStdoutNotifier(title=f"Endpoint Watch: {config.endpoint}")
    else:
        notifier = AdapterTelegramNotifier(
            config.telegram_token, config.telegram_chat_id
        )

    use_case = WatchUseCase(
        fetcher=AdapterRequestsFetcher(timeout=config.fetch_timeout),
        store=AdapterJsonFileStore(state_file),
        notifier=notifier,
        persist=not args.dry_run,
    )

    logger.info("Starting watch for endpoint: %s", config.endpoint)
    try:
        result = use_case.execute(
            config.endpoint, config.track_path, headers=config.headers
        )
    except KeyboardInterrupt:
        logger.error("Watch interrupted by user")
        return EXIT_INTERRUPTED
    except WatchError:
        # Already logged and notified by the use case.
        return EXIT_FAIL
    except Exception as e:
        logger.error("Watch failed: %s", e, exc_info=True)
        return EXIT_FAIL

    logger.info(
        "Watch completed: %s (%d values tracked)",
        result.outcome.value,
        len(result.current),
    )
    return EXIT_OK


def _fallback_notifier(
    environ: Mapping[str, str], dry_run: bool
) -> Optional[Notifier]:
    """Notifier for reporting config errors, if credentials are available."""
    if dry_run:
        return AdapterStdoutNotifier()
    token = environ.get("TELEGRAM_BOT_TOKEN")
    chat_id = environ.get("TELEGRAM_CHAT_ID")
    if not token or not chat_id:
        return None
    return AdapterTelegramNotifier(token, chat_id)


def _notify_quietly(notifier: Notifier, text: str) -> None:
    try:
        notifier.send(text)
    except NotificationError as e:
        logger.error("Notification failed: %s", e)


if __name__ == "__main__":
    sys.exit(main())
