"""Command-line entry point: CSV in, balance snapshot CSV out.

    python -m txledger transactions.csv > accounts.csv

The run loop owns the reporting policy: every rejected row (malformed or
refused by the engine) is logged exactly once at WARNING and counted, and
processing continues with the next row.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO, final

from txledger import __version__
from txledger.core.errors import LedgerError
from txledger.core.result import Err, Ok
from txledger.gateway.reader import open_input, read_records
from txledger.infra.config import DEFAULT_LEDGER_CONFIG, LedgerConfig, LoggingConfig
from txledger.infra.logging import setup_logging
from txledger.ledger.engine import LedgerEngine
from txledger.ledger.types import TransactionRecord
from txledger.reporting.snapshot import write_snapshot

logger = logging.getLogger(__name__)


@final
@dataclass(slots=True)
class RunSummary:
    """Counters for one pass over the input."""

    rows: int = 0
    applied: int = 0
    rejected: Counter[str] = field(default_factory=Counter)

    @property
    def rejected_total(self) -> int:
        return sum(self.rejected.values())


def _report(error: LedgerError, summary: RunSummary) -> None:
    summary.rejected[error.code] += 1
    logger.warning("rejected [%s] %s", error.code, error.message)
    logger.debug("rejection detail: %s", error.to_dict())


def run(
    results: Iterable[Ok[TransactionRecord] | Err[LedgerError]],
    engine: LedgerEngine,
) -> RunSummary:
    """Feed every parsed record to the engine, reporting each rejection once."""
    summary = RunSummary()
    for parsed in results:
        summary.rows += 1
        match parsed:
            case Err(error):
                _report(error, summary)
                continue
            case Ok(record):
                pass
        match engine.process(record):
            case Err(error):
                _report(error, summary)
            case Ok(_):
                summary.applied += 1
    return summary


def process_file(
    path: Path,
    out: TextIO,
    config: LedgerConfig = DEFAULT_LEDGER_CONFIG,
) -> RunSummary:
    """Run one CSV file through the ledger and write the snapshot to `out`.

    Raises OSError if the file cannot be opened.
    """
    engine = LedgerEngine()
    with open_input(path) as stream:
        summary = run(read_records(stream, config), engine)
    accounts = write_snapshot(engine.snapshot(), out, config.amount_places)
    logger.info(
        "processed %d row(s): %d applied, %d rejected, %d account(s), %d journaled tx",
        summary.rows, summary.applied, summary.rejected_total,
        accounts, len(engine.journal),
    )
    for code, count in sorted(summary.rejected.items()):
        logger.info("  %s: %d", code, count)
    return summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="txledger",
        description="Apply a CSV stream of transactions and print final client balances.",
    )
    parser.add_argument("input", type=Path, help="CSV file with type,client,tx,amount columns")
    parser.add_argument(
        "-o", "--output", type=Path, default=None,
        help="write the snapshot here instead of stdout",
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="stderr log verbosity (default: WARNING)",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="also log to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(LoggingConfig(
        level=logging.getLevelName(args.log_level), log_file=args.log_file,
    ))

    try:
        if args.output is None:
            process_file(args.input, sys.stdout)
        else:
            with args.output.open("w", newline="", encoding="utf-8") as out:
                process_file(args.input, out)
    except OSError as e:
        logger.error("cannot process %s: %s", args.input, e)
        return 1
    return 0
