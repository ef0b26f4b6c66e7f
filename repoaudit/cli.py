"""Command line entry point: run one audit and print the report."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from repoaudit.auditor import Auditor
from repoaudit.client import RegistryClient
from repoaudit.config import AuditConfig
from repoaudit.exceptions import RepoAuditError
from repoaudit.logging import configure_logging, get_logger

logger = get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repoaudit",
        description=(
            "Report the effective access level of every user on every "
            "repository of a registry. Connection settings are read from "
            "REPOAUDIT_* environment variables."
        ),
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="write the JSON report to this file instead of stdout",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="progress log level; logs go to stderr (default: INFO)",
    )
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="skip TLS certificate verification",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: 2)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(
        level=getattr(logging, args.log_level),
        handler=logging.StreamHandler(sys.stderr),
    )

    try:
        config = AuditConfig.from_env()
        if args.insecure:
            config.verify_tls = False
        logger.info("auditing %s as %s", config.host, config.username)

        with RegistryClient.from_config(config) as client:
            report = Auditor(client).run()
    except RepoAuditError as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        return 1

    logger.info("audit complete: %s", report.summary())

    output = report.to_json(indent=args.indent)
    if args.output is not None:
        args.output.write_text(output + "\n", encoding="utf-8")
    else:
        print(output)
    return 0
