"""CLI entry point for the results collector.

Provides ``main()`` for the ``vc-collector`` console script. It sets up
logging, builds a ``CollectorConfig`` from the flags, runs one
collect-and-send pass and prints an end-of-run summary.

Usage::

    vc-collector --server-name RC_WAR_1 --tag LIGA-Q1-2025
    vc-collector --directory /srv/vietcong/mpresults --only-today
    vc-collector --mode CTF --mode ATG --min-tag-matches 4
    vc-collector --dry-run           # parse and list matches, send nothing
"""

import argparse
import logging
import time

from collector.config import DEFAULT_API_ENDPOINT, DEFAULT_MODES, CollectorConfig
from collector.exceptions import DiscoveryError
from collector.logging_config import setup_logging
from collector.pipeline import RunSummary, run_collection

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the vc-collector CLI."""
    parser = argparse.ArgumentParser(
        prog="vc-collector",
        description="Parse Vietcong end-of-round results and send them to the results API",
    )
    parser.add_argument(
        "--server-name",
        type=str,
        default="",
        help='Server label attached to every match (e.g. "RC_WAR_1")',
    )
    parser.add_argument(
        "--tag",
        type=str,
        default="",
        help='Tag attached to every match (e.g. "LIGA-Q1-2025")',
    )
    parser.add_argument(
        "--mode",
        dest="modes",
        action="append",
        default=None,
        help="Allowed mode token; repeat for several (default: CTF, ATG)",
    )
    parser.add_argument(
        "--directory",
        type=str,
        default="mpresults",
        help="Directory holding endresults-*.txt files (default: mpresults)",
    )
    parser.add_argument(
        "--only-today",
        action="store_true",
        help="Only process result files from today",
    )
    parser.add_argument(
        "--api-endpoint",
        type=str,
        default=DEFAULT_API_ENDPOINT,
        help=f"Results API endpoint (default: {DEFAULT_API_ENDPOINT})",
    )
    parser.add_argument(
        "--min-tag-matches",
        type=int,
        default=3,
        help="Minimum players sharing a clan tag (default: 3)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Seconds before the API request is abandoned (default: 30)",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default="data",
        help="Directory for run logs (default: data)",
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Log to the console only",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Assemble and list matches without sending them",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show DEBUG output (including why files were skipped) on the console",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> CollectorConfig:
    """Translate parsed CLI arguments into a CollectorConfig."""
    return CollectorConfig(
        server_name=args.server_name,
        tag=args.tag,
        allowed_modes=tuple(args.modes) if args.modes else DEFAULT_MODES,
        directory=args.directory,
        only_today=args.only_today,
        api_endpoint=args.api_endpoint,
        request_timeout=args.timeout,
        min_tag_matches=args.min_tag_matches,
        data_dir=args.data_dir,
    )


def _format_results(summary: RunSummary, wall_time: float, log_file) -> str:
    """Format end-of-run results into a human-readable summary string."""
    progress = summary.batch.progress.summary()
    if summary.send_result is None:
        delivery = "not sent (dry run)"
    elif summary.send_result.success:
        delivery = f"{summary.sent} matches sent"
    else:
        delivery = f"FAILED: {summary.send_result.response}"

    lines = [
        "=" * 60,
        "Collection complete",
        "-" * 60,
        "Files:       {} found, {} assembled, {} skipped".format(
            progress["total"],
            progress["assembled"],
            progress["skipped"] + progress["unreadable"] + progress["errors"],
        ),
        f"Delivery:    {delivery}",
        "-" * 60,
        f"Wall time:   {wall_time:.1f}s",
    ]
    if log_file is not None:
        lines.append(f"Log file:    {log_file}")
    lines.append("=" * 60)
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Entry point for the vc-collector console script.

    Returns:
        Process exit code: 0 on success, 1 when discovery or sending failed.
    """
    args = build_parser().parse_args(argv)
    config = config_from_args(args)

    log_file = setup_logging(
        data_dir=config.data_dir,
        console_level=logging.DEBUG if args.verbose else logging.INFO,
        write_file=not args.no_log_file,
    )
    logger.info(
        "Starting vc-collector: directory=%s, modes=%s, min_tag_matches=%d, "
        "only_today=%s, endpoint=%s",
        config.directory, ",".join(config.allowed_modes),
        config.min_tag_matches, config.only_today, config.api_endpoint,
    )

    start_time = time.monotonic()
    try:
        summary = run_collection(config, dry_run=args.dry_run)
    except DiscoveryError as exc:
        logger.error("%s", exc)
        return 1

    logger.info(
        "\n%s",
        _format_results(summary, time.monotonic() - start_time, log_file),
    )
    return 0 if summary.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
