"""Streaming CSV ingestion.

read_records yields one Result per data row, in file order, so the caller
can feed the engine without holding the whole file in memory. Nothing in
here raises on bad content: unreadable rows become Err values.
"""

from __future__ import annotations

import csv
from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

from txledger.core.errors import FieldViolation, MalformedRecord
from txledger.core.result import Err, Ok
from txledger.gateway.parser import normalize_row, parse_record
from txledger.infra.config import DEFAULT_LEDGER_CONFIG, INPUT_FIELDS, LedgerConfig
from txledger.ledger.types import TransactionRecord

_REQUIRED_COLUMNS = frozenset(INPUT_FIELDS) - {"amount"}


def _reader_error(message: str, code: str, line: int) -> MalformedRecord:
    return MalformedRecord(
        message=f"line {line}: {message}",
        code=code,
        source="gateway.reader.read_records",
        fields=(FieldViolation(path="<row>", constraint=message, actual_value=f"line {line}"),),
    )


def open_input(path: Path) -> TextIO:
    """Open a transaction file for read_records.

    Undecodable bytes become U+FFFD instead of raising, so a corrupted row
    fails in parse_record like any other malformed row. Raises OSError if the
    file cannot be opened.
    """
    return path.open(newline="", encoding="utf-8", errors="replace")


def read_records(
    stream: TextIO,
    config: LedgerConfig = DEFAULT_LEDGER_CONFIG,
) -> Iterator[Ok[TransactionRecord] | Err[MalformedRecord]]:
    """Yield a parsed record (or the reason it was rejected) per data row.

    The header row names the columns; whitespace around names and cells is
    ignored and name matching is case-insensitive. A header without the
    type/client/tx columns yields a single Err and ends the stream.
    """
    reader = csv.DictReader(stream, skipinitialspace=True)
    try:
        header = reader.fieldnames
    except csv.Error as e:
        yield Err(_reader_error(f"unreadable header: {e}", "MALFORMED_HEADER", reader.line_num))
        return
    if header is None:
        return
    present = {name.strip().lower() for name in header}
    missing = sorted(_REQUIRED_COLUMNS - present)
    if missing:
        yield Err(_reader_error(
            f"header is missing column(s) {', '.join(missing)}", "MALFORMED_HEADER", 1,
        ))
        return

    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            yield Err(_reader_error(f"unreadable row: {e}", "MALFORMED_RECORD", reader.line_num))
            continue
        match parse_record(normalize_row(row), config):
            case Ok(record):
                yield Ok(record)
            case Err(err):
                yield Err(err.with_context(f"line {reader.line_num}"))  # type: ignore[arg-type]
