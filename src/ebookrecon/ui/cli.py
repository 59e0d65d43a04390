from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from ebookrecon.app import run_reconciliation
from ebookrecon.config import ConfigurationError, configure_logging, get_reconcile_config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Compare entitlement manifests against activated portfolio URLs and MARC "
            "records, writing reports and MARC record sets"
        ),
    )
    parser.add_argument(
        "-d",
        "--directory",
        type=Path,
        help="Directory holding the CSV exports, manifests and MARC files "
        "(defaults to $EBOOKRECON_INPUT_DIR or the current directory)",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        help="Directory receiving reports and record sets "
        "(defaults to $EBOOKRECON_OUTPUT_DIR or ./reports)",
    )
    parser.add_argument(
        "-p",
        "--proxy",
        type=str,
        help="Proxy prefix for your institution, e.g. http://proxy.example.edu/login?url=",
    )
    parser.add_argument(
        "--platform-url",
        type=str,
        help="URL every platform link starts with",
    )
    parser.add_argument(
        "--marker",
        type=str,
        help="Path fragment from which URLs are compared (default: /ebooks/)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output",
    )
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    level = logging.DEBUG if parsed_args.verbose else logging.INFO
    configure_logging(level=level)

    try:
        config = get_reconcile_config(
            input_dir=parsed_args.directory,
            output_dir=parsed_args.output_dir,
            proxy_prefix=parsed_args.proxy,
            platform_url=parsed_args.platform_url,
            identity_marker=parsed_args.marker,
        )
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)

    try:
        configure_logging(level=level, force=True, log_file=config.output_path("run_log"))
        log.info("Reconciling %s into %s", config.input_dir, config.output_dir)
        summary = run_reconciliation(config)
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)

    if summary.invalid_manifests:
        log.warning("Invalid manifests skipped: %s", ", ".join(summary.invalid_manifests))


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
