from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from linksync.app import sync_globi_links
from linksync.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile observation links with providers")
    subparsers = parser.add_subparsers(dest="command", required=True)

    globi = subparsers.add_parser(
        "globi",
        help="Sync ObservationLinks for observations integrated into GloBI",
        description=(
            "Create ObservationLinks for observations that have been integrated into GloBI "
            "and delete the ones GloBI no longer reports."
        ),
    )
    globi.add_argument(
        "-p",
        "--according-to",
        type=str,
        default=None,
        help="Data provider name in GloBI (defaults to config)",
    )
    globi.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Print debug statements without saving links or re-indexing",
    )
    globi.add_argument(
        "--log-task-name",
        type=str,
        help="Log with the specified task name",
    )

    return parser.parse_args(list(argv))


def _validate_args(args: argparse.Namespace) -> None:
    according_to: str | None = getattr(args, "according_to", None)
    if according_to is not None and not according_to.strip():
        raise ValueError("--according-to must not be blank")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        _validate_args(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    if getattr(parsed_args, "debug", False):
        configure_logging(level=logging.DEBUG, force=True)

    try:
        if parsed_args.command == "globi":
            sync_globi_links(
                according_to=parsed_args.according_to,
                debug=parsed_args.debug,
                log_task_name=parsed_args.log_task_name,
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during link sync")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point: load ``.env`` and install the SIGINT handler."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
