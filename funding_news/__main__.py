"""
CLI entry point for funding-news.

Usage:
    python -m funding_news
    python -m funding_news --mode debug
    python -m funding_news --config /path/to/sources.json --output news.json
"""

import argparse
import asyncio
import json
import logging
import os
import sys

import structlog

from .core.http_client import DEFAULT_TIMEOUT

# Log level mapping
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def setup_logging(level: str = "INFO", json_output: bool = False):
    """Configure structured logging (to stderr, stdout carries the payload)."""
    log_level = LOG_LEVELS.get(level.upper(), logging.INFO)

    if json_output:
        processors = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Humanitarian and development funding headlines",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Ranked headlines from the packaged sources
  python -m funding_news

  # Unfiltered items per source, with errors
  python -m funding_news --mode raw

  # Headlines plus per-source counters
  python -m funding_news --mode debug

  # Use a custom config file or URL
  python -m funding_news --config https://example.org/sources.json
        """,
    )

    parser.add_argument(
        "--mode",
        choices=["headlines", "raw", "debug"],
        default="headlines",
        help="Output view (default: headlines)",
    )

    parser.add_argument(
        "--config",
        type=str,
        default=os.getenv("FUNDING_NEWS_CONFIG"),
        help="Path or URL of the sources config (default: $FUNDING_NEWS_CONFIG or packaged sources.json)",
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"Per-fetch timeout in seconds (default: {DEFAULT_TIMEOUT:g})",
    )

    parser.add_argument(
        "--output",
        type=str,
        help="Write the JSON payload to this file instead of stdout",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Output logs as JSON (for production)",
    )

    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version and exit",
    )

    return parser.parse_args(argv)


def write_payload(payload: dict, output: str = None) -> None:
    """Write payload as JSON to a file or stdout."""
    text = json.dumps(payload, ensure_ascii=False, indent=2)
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text + "\n")
    else:
        print(text)


async def main_async(args) -> dict:
    """Async main function."""
    from .orchestrator import HeadlinesPipeline

    logger = structlog.get_logger(__name__)
    logger.info("starting_funding_news", mode=args.mode, config=args.config)

    pipeline = HeadlinesPipeline(config_path=args.config, timeout=args.timeout)
    payload = await pipeline.run(mode=args.mode)

    if "error" in payload:
        logger.warning("pipeline_error", error=payload["error"])
    else:
        logger.info("headlines_ready", count=payload.get("count"))

    return payload


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    # Version check
    if args.version:
        from .orchestrator import version_report
        report = version_report()
        print(f"funding-news {report['version']} ({report['build']})")
        sys.exit(0)

    setup_logging(args.log_level, args.json_logs)

    try:
        payload = asyncio.run(main_async(args))
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)

    write_payload(payload, args.output)
    sys.exit(0)


if __name__ == "__main__":
    main()
