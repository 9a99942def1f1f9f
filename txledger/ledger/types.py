"""Ledger domain types: TransactionRecord, JournalEntry, AccountState, AccountView.

The five record types are a closed set dispatched by a single match in the
engine. Journal entries and account states are immutable values; the engine
replaces them wholesale on every accepted mutation.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import final

from txledger.core.errors import FieldViolation, MalformedRecord
from txledger.core.identifiers import ClientId, TxId
from txledger.core.money import ZERO, Amount
from txledger.core.result import Err, Ok

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class RecordType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def moves_funds(self) -> bool:
        """True for the two types that carry an amount and get journaled."""
        return self in (RecordType.DEPOSIT, RecordType.WITHDRAWAL)


class EntryKind(Enum):
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"


class DisputeState(Enum):
    NONE = "NONE"
    DISPUTED = "DISPUTED"
    RESOLVED = "RESOLVED"
    CHARGED_BACK = "CHARGED_BACK"

    @property
    def is_terminal(self) -> bool:
        return self in (DisputeState.RESOLVED, DisputeState.CHARGED_BACK)


# NONE -> DISPUTED -> {RESOLVED, CHARGED_BACK}; nothing leaves a terminal state.
ALLOWED_TRANSITIONS: frozenset[tuple[DisputeState, DisputeState]] = frozenset({
    (DisputeState.NONE, DisputeState.DISPUTED),
    (DisputeState.DISPUTED, DisputeState.RESOLVED),
    (DisputeState.DISPUTED, DisputeState.CHARGED_BACK),
})


# ---------------------------------------------------------------------------
# TransactionRecord — one input row
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class TransactionRecord:
    """Typed input record. amount is present iff kind moves funds."""

    kind: RecordType
    client_id: ClientId
    tx_id: TxId
    amount: Amount | None = None

    def __post_init__(self) -> None:
        if self.kind.moves_funds and self.amount is None:
            raise TypeError(f"TransactionRecord: {self.kind.value} requires an amount")
        if not self.kind.moves_funds and self.amount is not None:
            raise TypeError(f"TransactionRecord: {self.kind.value} must not carry an amount")

    @staticmethod
    def create(
        kind: RecordType,
        client_id: ClientId,
        tx_id: TxId,
        amount: Amount | None = None,
    ) -> Ok[TransactionRecord] | Err[MalformedRecord]:
        """Validate the amount/kind pairing and return Result."""
        if kind.moves_funds and amount is None:
            constraint = f"required for {kind.value}"
        elif not kind.moves_funds and amount is not None:
            constraint = f"must be empty for {kind.value}"
        else:
            return Ok(TransactionRecord(kind=kind, client_id=client_id, tx_id=tx_id, amount=amount))
        return Err(MalformedRecord(
            message=f"TransactionRecord: amount {constraint}",
            code="AMOUNT_MISMATCH",
            source="ledger.types.TransactionRecord.create",
            tx_id=tx_id.value,
            client_id=client_id.value,
            fields=(FieldViolation(
                path="amount", constraint=constraint,
                actual_value=repr(None if amount is None else str(amount.value)),
            ),),
        ))

    @staticmethod
    def deposit(client: int, tx: int, amount: str) -> TransactionRecord:
        """Convenience constructor from plain values. Raises on invalid input."""
        return TransactionRecord(
            RecordType.DEPOSIT, ClientId(client), TxId(tx), Amount(Decimal(amount)),
        )

    @staticmethod
    def withdrawal(client: int, tx: int, amount: str) -> TransactionRecord:
        """Convenience constructor from plain values. Raises on invalid input."""
        return TransactionRecord(
            RecordType.WITHDRAWAL, ClientId(client), TxId(tx), Amount(Decimal(amount)),
        )

    @staticmethod
    def dispute(client: int, tx: int) -> TransactionRecord:
        return TransactionRecord(RecordType.DISPUTE, ClientId(client), TxId(tx))

    @staticmethod
    def resolve(client: int, tx: int) -> TransactionRecord:
        return TransactionRecord(RecordType.RESOLVE, ClientId(client), TxId(tx))

    @staticmethod
    def chargeback(client: int, tx: int) -> TransactionRecord:
        return TransactionRecord(RecordType.CHARGEBACK, ClientId(client), TxId(tx))


# ---------------------------------------------------------------------------
# JournalEntry — facts about one accepted deposit or withdrawal
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class JournalEntry:
    tx_id: int
    client_id: int
    kind: EntryKind
    amount: Decimal
    dispute_state: DisputeState = DisputeState.NONE

    def with_state(self, state: DisputeState) -> JournalEntry:
        return replace(self, dispute_state=state)


# ---------------------------------------------------------------------------
# AccountState (mutable via replacement) and AccountView (snapshot row)
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class AccountView:
    """One row of the final snapshot. total is materialized for the output layer."""

    client_id: int
    available: Decimal
    held: Decimal
    total: Decimal
    locked: bool


@final
@dataclass(frozen=True, slots=True)
class AccountState:
    """Per-client balances. total is always derived, never stored."""

    client_id: int
    available: Decimal = ZERO
    held: Decimal = ZERO
    locked: bool = False

    @property
    def total(self) -> Decimal:
        return self.available + self.held

    def credit(self, amount: Decimal) -> AccountState:
        return replace(self, available=self.available + amount)

    def debit(self, amount: Decimal) -> AccountState:
        return replace(self, available=self.available - amount)

    def hold(self, amount: Decimal) -> AccountState:
        """Move amount from available into held."""
        return replace(self, available=self.available - amount, held=self.held + amount)

    def release(self, amount: Decimal) -> AccountState:
        """Move amount from held back into available."""
        return replace(self, available=self.available + amount, held=self.held - amount)

    def remove_held(self, amount: Decimal) -> AccountState:
        """Drop amount from held permanently."""
        return replace(self, held=self.held - amount)

    def lock(self) -> AccountState:
        return replace(self, locked=True)

    def view(self) -> AccountView:
        return AccountView(
            client_id=self.client_id,
            available=self.available,
            held=self.held,
            total=self.total,
            locked=self.locked,
        )
