"""Balance snapshot reporting — pure projection from AccountView.

Reporting is projection, not transformation: every value in a row comes
straight from the view, only reformatted as text.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TextIO, final

from txledger.core.money import AMOUNT_PLACES, format_amount
from txledger.infra.config import OUTPUT_FIELDS
from txledger.ledger.types import AccountView


@final
@dataclass(frozen=True, slots=True)
class SnapshotRow:
    """One output line, already rendered as text."""

    client: str
    available: str
    held: str
    total: str
    locked: str

    def as_tuple(self) -> tuple[str, str, str, str, str]:
        return (self.client, self.available, self.held, self.total, self.locked)


def project_row(view: AccountView, places: int = AMOUNT_PLACES) -> SnapshotRow:
    """Render one account: amounts with fixed places, locked as true/false."""
    return SnapshotRow(
        client=str(view.client_id),
        available=format_amount(view.available, places),
        held=format_amount(view.held, places),
        total=format_amount(view.total, places),
        locked="true" if view.locked else "false",
    )


def write_snapshot(
    views: Iterable[AccountView],
    stream: TextIO,
    places: int = AMOUNT_PLACES,
) -> int:
    """Write header plus one CSV line per account. Returns the number of accounts."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(OUTPUT_FIELDS)
    count = 0
    for view in views:
        writer.writerow(project_row(view, places).as_tuple())
        count += 1
    return count
