"""Command line access to harness state shared between test processes."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from event_testkit.core.config import get_settings
from event_testkit.core.errors import TestkitError
from event_testkit.core.logging import configure_logging
from event_testkit.services.cache import build_cache
from event_testkit.testing.allow_list import AllowListStore

LOGGER = logging.getLogger("event_testkit.cli")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="event_testkit", description="Inspect event test harness state.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    allowed = subparsers.add_parser("allowed-listeners", help="Show or reset the persisted listener allow-list.")
    allowed.add_argument("action", choices=("show", "clear"))
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    if args.verbose:
        settings = settings.model_copy(update={"log_level": "DEBUG"})
    configure_logging(settings)

    store = AllowListStore(build_cache(settings))
    try:
        if args.action == "clear":
            store.clear()
            LOGGER.info("Allowed listeners cleared; all listeners will be notified")
            return 0
        state = store.state
    except (TestkitError, ValueError, OSError) as exc:
        LOGGER.error("Could not access allowed listeners: %s", exc)
        return 1

    if state.listeners is None:
        print("unrestricted")
    elif not state.listeners:
        print("none (all listeners suppressed)")
    else:
        for identity in sorted(state.listeners):
            print(identity)
    return 0


if __name__ == "__main__":
    sys.exit(main())
