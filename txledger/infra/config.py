"""Runtime configuration for the ledger pipeline.

No environment or file reads. Pure configuration data; the CLI builds
these from its arguments.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_DOWN
from pathlib import Path
from typing import final

from txledger.core.identifiers import ClientId, TxId
from txledger.core.money import AMOUNT_PLACES

# ---------------------------------------------------------------------------
# Wire format
# ---------------------------------------------------------------------------

INPUT_FIELDS: tuple[str, ...] = ("type", "client", "tx", "amount")
OUTPUT_FIELDS: tuple[str, ...] = ("client", "available", "held", "total", "locked")


# ---------------------------------------------------------------------------
# Ledger / gateway configuration
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class LedgerConfig:
    """Parsing limits and precision for incoming records."""

    amount_places: int = AMOUNT_PLACES
    amount_rounding: str = ROUND_DOWN  # truncate extra digits, never round up
    max_client_id: int = ClientId.MAX
    max_tx_id: int = TxId.MAX

    def __post_init__(self) -> None:
        if not 0 <= self.amount_places <= AMOUNT_PLACES:
            raise TypeError(
                f"LedgerConfig.amount_places must be in [0, {AMOUNT_PLACES}], "
                f"got {self.amount_places}"
            )


DEFAULT_LEDGER_CONFIG = LedgerConfig()


# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@final
@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Where and how verbosely to report. stdout is reserved for CSV output."""

    level: int = logging.WARNING
    log_file: Path | None = None
    fmt: str = LOG_FORMAT
    datefmt: str = LOG_DATE_FORMAT
