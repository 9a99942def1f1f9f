"""Client balance engine with dispute handling.

Core invariants, for every account at every step:
    held >= 0
    total == available + held
    a locked account never changes again

LedgerEngine is @final but NOT a dataclass — it holds mutable internal state.
"""

from __future__ import annotations

import logging
from decimal import localcontext
from typing import final

from txledger.core.errors import (
    AccountLocked,
    ClientMismatch,
    InsufficientFunds,
    LedgerError,
)
from txledger.core.money import LEDGER_DECIMAL_CONTEXT
from txledger.core.result import Err, Ok
from txledger.ledger.journal import TransactionJournal
from txledger.ledger.types import (
    AccountState,
    AccountView,
    DisputeState,
    EntryKind,
    JournalEntry,
    RecordType,
    TransactionRecord,
)

logger = logging.getLogger(__name__)

_SOURCE = "ledger.engine.LedgerEngine"

# Target dispute state for each dispute-family record type.
_DISPUTE_TARGETS: dict[RecordType, DisputeState] = {
    RecordType.DISPUTE: DisputeState.DISPUTED,
    RecordType.RESOLVE: DisputeState.RESOLVED,
    RecordType.CHARGEBACK: DisputeState.CHARGED_BACK,
}


@final
class LedgerEngine:
    """Applies one TransactionRecord at a time to the account table.

    Every record either fully applies (account and journal both updated) or
    is rejected with Err and leaves all state untouched. Accounts are
    materialized by the first accepted record for their client.
    """

    def __init__(self, journal: TransactionJournal | None = None) -> None:
        self._accounts: dict[int, AccountState] = {}
        self._journal = journal if journal is not None else TransactionJournal()

    @property
    def journal(self) -> TransactionJournal:
        return self._journal

    def process(self, record: TransactionRecord) -> Ok[None] | Err[LedgerError]:
        """Apply a single record.

        1. Reject if the addressed account is locked
        2. Dispatch on record type (single match, closed set)
        3. Commit the journal change, then the account change

        On any failure nothing is written.
        """
        client_id = record.client_id.value
        account = self._accounts.get(client_id)
        if account is None:
            account = AccountState(client_id=client_id)

        if account.locked:
            return Err(AccountLocked(
                message=f"client {client_id} is locked; {record.kind.value} ignored",
                code="ACCOUNT_LOCKED",
                source=f"{_SOURCE}.process",
                tx_id=record.tx_id.value,
                client_id=client_id,
            ))

        with localcontext(LEDGER_DECIMAL_CONTEXT):
            match record.kind:
                case RecordType.DEPOSIT:
                    result = self._deposit(account, record)
                case RecordType.WITHDRAWAL:
                    result = self._withdraw(account, record)
                case RecordType.DISPUTE | RecordType.RESOLVE | RecordType.CHARGEBACK:
                    result = self._dispute_family(account, record)

        match result:
            case Err(e):
                return Err(e)
            case Ok(updated):
                self._accounts[client_id] = updated
                return Ok(None)

    def snapshot(self) -> tuple[AccountView, ...]:
        """Current state of every materialized account, ordered by client id."""
        return tuple(self._accounts[cid].view() for cid in sorted(self._accounts))

    def get_account(self, client_id: int) -> AccountView | None:
        """O(1) lookup. None if no record for this client was ever accepted."""
        account = self._accounts.get(client_id)
        return account.view() if account is not None else None

    def account_count(self) -> int:
        return len(self._accounts)

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def _deposit(
        self, account: AccountState, record: TransactionRecord,
    ) -> Ok[AccountState] | Err[LedgerError]:
        assert record.amount is not None
        amount = record.amount.value
        match self._journal.record(
            record.tx_id.value, account.client_id, EntryKind.DEPOSIT, amount,
        ):
            case Err(e):
                return Err(e)
            case Ok(_):
                return Ok(account.credit(amount))

    def _withdraw(
        self, account: AccountState, record: TransactionRecord,
    ) -> Ok[AccountState] | Err[LedgerError]:
        assert record.amount is not None
        amount = record.amount.value
        if account.available < amount:
            return Err(InsufficientFunds(
                message=(
                    f"client {account.client_id} has {account.available} available, "
                    f"withdrawal of {amount} refused"
                ),
                code="INSUFFICIENT_FUNDS",
                source=f"{_SOURCE}._withdraw",
                tx_id=record.tx_id.value,
                client_id=account.client_id,
                available=account.available,
                requested=amount,
            ))
        match self._journal.record(
            record.tx_id.value, account.client_id, EntryKind.WITHDRAWAL, amount,
        ):
            case Err(e):
                return Err(e)
            case Ok(_):
                return Ok(account.debit(amount))

    def _dispute_family(
        self, account: AccountState, record: TransactionRecord,
    ) -> Ok[AccountState] | Err[LedgerError]:
        tx_id = record.tx_id.value
        match self._journal.get(tx_id):
            case Err(e):
                return Err(e.with_context(f"{record.kind.value} by client {account.client_id}"))
            case Ok(entry):
                pass

        if entry.client_id != account.client_id:
            return Err(ClientMismatch(
                message=(
                    f"{record.kind.value} for tx {tx_id} names client {account.client_id}, "
                    f"but tx belongs to client {entry.client_id}"
                ),
                code="CLIENT_MISMATCH",
                source=f"{_SOURCE}._dispute_family",
                tx_id=tx_id,
                client_id=account.client_id,
                expected_client=entry.client_id,
                actual_client=account.client_id,
            ))

        match self._journal.transition(tx_id, _DISPUTE_TARGETS[record.kind]):
            case Err(te):
                return Err(te)
            case Ok(updated):
                return Ok(_apply_dispute_effect(account, updated))


def _apply_dispute_effect(account: AccountState, entry: JournalEntry) -> AccountState:
    """Balance effect of a dispute state change that was just journaled.

    Disputing or resolving a withdrawal moves no money: those funds already
    left the account and cannot be frozen. Charging a withdrawal back still
    claws the amount back out of available, which may drive it negative.
    """
    amount = entry.amount
    match entry.dispute_state, entry.kind:
        case DisputeState.DISPUTED, EntryKind.DEPOSIT:
            return account.hold(amount)
        case DisputeState.RESOLVED, EntryKind.DEPOSIT:
            return account.release(amount)
        case DisputeState.CHARGED_BACK, EntryKind.DEPOSIT:
            logger.debug("client %s locked by chargeback of tx %s", account.client_id, entry.tx_id)
            return account.remove_held(amount).lock()
        case DisputeState.CHARGED_BACK, EntryKind.WITHDRAWAL:
            logger.debug("client %s locked by chargeback of tx %s", account.client_id, entry.tx_id)
            return account.debit(amount).lock()
        case _:
            return account
