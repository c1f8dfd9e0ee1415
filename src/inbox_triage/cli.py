"""
Command-line entry point: run one triage pass and print the summary.

Exit codes: 0 when the run completes (per-email failures included),
1 when the pipeline cannot start.
"""

import argparse
import logging
import sys

from pydantic import ValidationError

from inbox_triage.agent.pipeline import TriagePipeline
from inbox_triage.config import Settings, configure_logging
from inbox_triage.models import RunSummary

logger = logging.getLogger(__name__)


def print_summary(summary: RunSummary, verbose: bool = False) -> None:
    """Print a run summary to stdout."""
    print(f"\n{'=' * 60}")
    print(summary.summary)
    print(f"{'=' * 60}")

    for result in summary.results:
        status = "ok  " if result.success else "FAIL"
        line = f"  [{status}] {result.email_id}: {result.action}"
        if verbose and result.error:
            line += f" ({result.error})"
        print(line)

    if summary.failed:
        print(f"\n{summary.failed} email(s) failed")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inbox-triage",
        description="Classify unread Gmail and reply, schedule, archive or flag each email",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                    Process up to MAX_EMAILS unread emails
  %(prog)s --max-emails 5     Process at most 5 emails
  %(prog)s --timeout 120      Stop starting new emails after 2 minutes
        """,
    )
    parser.add_argument(
        "--max-emails",
        "-n",
        type=int,
        default=None,
        help="Maximum number of unread emails to process",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Run budget in seconds",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging and show per-email errors",
    )
    return parser


def main(args: list[str] | None = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None).

    Returns:
        Exit code (0 for a completed run, 1 for a startup failure).
    """
    parsed_args = build_parser().parse_args(args)

    if parsed_args.max_emails is not None and parsed_args.max_emails < 0:
        print("error: --max-emails must be >= 0", file=sys.stderr)
        return 1
    if parsed_args.timeout is not None and parsed_args.timeout <= 0:
        print("error: --timeout must be > 0", file=sys.stderr)
        return 1

    try:
        settings = Settings()
    except ValidationError as e:
        configure_logging(parsed_args.verbose)
        logger.error(f"Invalid configuration: {e}")
        return 1

    configure_logging(settings.debug or parsed_args.verbose)

    try:
        pipeline = TriagePipeline.from_settings(settings)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.exception(f"Could not start the triage pipeline: {e}")
        return 1

    summary = pipeline.run(max_emails=parsed_args.max_emails, timeout_seconds=parsed_args.timeout)
    print_summary(summary, verbose=parsed_args.verbose)
    return 0


if __name__ == "__main__":
    sys.exit(main())
