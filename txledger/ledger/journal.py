"""Append-only journal of accepted deposits and withdrawals.

Entries are keyed by tx id and never removed, so dispute-family records can
always be checked against the facts of the transaction they reference.
Memory grows linearly with the number of journaled transactions.
"""

from __future__ import annotations

from decimal import Decimal
from typing import final

from txledger.core.errors import DuplicateTransaction, InvalidDisputeTransition, UnknownTransaction
from txledger.core.result import Err, Ok
from txledger.ledger.types import ALLOWED_TRANSITIONS, DisputeState, EntryKind, JournalEntry


@final
class TransactionJournal:
    """tx id -> JournalEntry table. @final but NOT a dataclass — mutable state."""

    def __init__(self) -> None:
        self._entries: dict[int, JournalEntry] = {}

    def record(
        self, tx_id: int, client_id: int, kind: EntryKind, amount: Decimal,
    ) -> Ok[JournalEntry] | Err[DuplicateTransaction]:
        """Insert a new entry. The first occurrence of a tx id stays authoritative."""
        existing = self._entries.get(tx_id)
        if existing is not None:
            return Err(DuplicateTransaction(
                message=(
                    f"tx {tx_id} already journaled as {existing.kind.value} "
                    f"for client {existing.client_id}"
                ),
                code="DUPLICATE_TRANSACTION",
                source="ledger.journal.TransactionJournal.record",
                tx_id=tx_id,
                client_id=client_id,
            ))
        entry = JournalEntry(tx_id=tx_id, client_id=client_id, kind=kind, amount=amount)
        self._entries[tx_id] = entry
        return Ok(entry)

    def get(self, tx_id: int) -> Ok[JournalEntry] | Err[UnknownTransaction]:
        entry = self._entries.get(tx_id)
        if entry is None:
            return Err(UnknownTransaction(
                message=f"tx {tx_id} not found",
                code="UNKNOWN_TRANSACTION",
                source="ledger.journal.TransactionJournal.get",
                tx_id=tx_id,
            ))
        return Ok(entry)

    def check_transition(
        self, entry: JournalEntry, new_state: DisputeState,
    ) -> Ok[JournalEntry] | Err[InvalidDisputeTransition]:
        """Validate a state change without applying it. Returns the would-be entry."""
        if (entry.dispute_state, new_state) not in ALLOWED_TRANSITIONS:
            reason = " (dispute already settled)" if entry.dispute_state.is_terminal else ""
            return Err(InvalidDisputeTransition(
                message=(
                    f"tx {entry.tx_id} cannot move from "
                    f"{entry.dispute_state.value} to {new_state.value}{reason}"
                ),
                code="INVALID_DISPUTE_TRANSITION",
                source="ledger.journal.TransactionJournal.transition",
                tx_id=entry.tx_id,
                client_id=entry.client_id,
                from_state=entry.dispute_state.value,
                to_state=new_state.value,
            ))
        return Ok(entry.with_state(new_state))

    def transition(
        self, tx_id: int, new_state: DisputeState,
    ) -> Ok[JournalEntry] | Err[UnknownTransaction | InvalidDisputeTransition]:
        """Validate and apply a dispute state change (NONE -> DISPUTED -> terminal)."""
        match self.get(tx_id):
            case Err(e):
                return Err(e)
            case Ok(entry):
                pass
        match self.check_transition(entry, new_state):
            case Err(te):
                return Err(te)
            case Ok(updated):
                self._entries[tx_id] = updated
                return Ok(updated)

    def __len__(self) -> int:
        return len(self._entries)
