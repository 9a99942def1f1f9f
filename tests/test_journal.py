"""Tests for txledger.ledger.journal — TransactionJournal and the dispute state machine."""

from __future__ import annotations

import itertools
from decimal import Decimal

import pytest

from txledger.core.errors import DuplicateTransaction, InvalidDisputeTransition, UnknownTransaction
from txledger.core.result import Err, Ok, unwrap
from txledger.ledger.journal import TransactionJournal
from txledger.ledger.types import ALLOWED_TRANSITIONS, DisputeState, EntryKind


def _journal_with(tx_id: int = 1, client: int = 1, amount: str = "10") -> TransactionJournal:
    journal = TransactionJournal()
    unwrap(journal.record(tx_id, client, EntryKind.DEPOSIT, Decimal(amount)))
    return journal


class TestRecord:
    def test_record_returns_entry(self) -> None:
        journal = TransactionJournal()
        result = journal.record(5, 2, EntryKind.WITHDRAWAL, Decimal("1.5"))
        assert isinstance(result, Ok)
        entry = result.value
        assert (entry.tx_id, entry.client_id, entry.kind) == (5, 2, EntryKind.WITHDRAWAL)
        assert entry.amount == Decimal("1.5")
        assert entry.dispute_state is DisputeState.NONE

    def test_duplicate_rejected(self) -> None:
        journal = _journal_with()
        result = journal.record(1, 3, EntryKind.WITHDRAWAL, Decimal("99"))
        assert isinstance(result, Err)
        assert isinstance(result.error, DuplicateTransaction)
        assert result.error.code == "DUPLICATE_TRANSACTION"

    def test_first_occurrence_stays_authoritative(self) -> None:
        journal = _journal_with(amount="10")
        journal.record(1, 3, EntryKind.WITHDRAWAL, Decimal("99"))
        entry = unwrap(journal.get(1))
        assert entry.client_id == 1
        assert entry.amount == Decimal("10")
        assert len(journal) == 1


class TestGet:
    def test_unknown(self) -> None:
        result = TransactionJournal().get(42)
        assert isinstance(result, Err)
        assert isinstance(result.error, UnknownTransaction)
        assert result.error.tx_id == 42

    def test_known(self) -> None:
        journal = _journal_with(tx_id=7)
        assert unwrap(journal.get(7)).tx_id == 7
        assert isinstance(journal.get(8), Err)


class TestTransition:
    def test_happy_path_resolve(self) -> None:
        journal = _journal_with()
        assert unwrap(journal.transition(1, DisputeState.DISPUTED)).dispute_state is (
            DisputeState.DISPUTED
        )
        assert unwrap(journal.transition(1, DisputeState.RESOLVED)).dispute_state is (
            DisputeState.RESOLVED
        )
        assert unwrap(journal.get(1)).dispute_state is DisputeState.RESOLVED

    def test_happy_path_chargeback(self) -> None:
        journal = _journal_with()
        journal.transition(1, DisputeState.DISPUTED)
        result = journal.transition(1, DisputeState.CHARGED_BACK)
        assert isinstance(result, Ok)
        assert result.value.dispute_state is DisputeState.CHARGED_BACK

    def test_unknown_tx(self) -> None:
        result = TransactionJournal().transition(3, DisputeState.DISPUTED)
        assert isinstance(result, Err)
        assert isinstance(result.error, UnknownTransaction)

    @pytest.mark.parametrize("terminal", [DisputeState.RESOLVED, DisputeState.CHARGED_BACK])
    @pytest.mark.parametrize("target", list(DisputeState))
    def test_terminal_states_have_no_exit(
        self, terminal: DisputeState, target: DisputeState,
    ) -> None:
        journal = _journal_with()
        journal.transition(1, DisputeState.DISPUTED)
        journal.transition(1, terminal)
        result = journal.transition(1, target)
        assert isinstance(result, Err)
        assert isinstance(result.error, InvalidDisputeTransition)
        assert result.error.from_state == terminal.value
        assert result.error.to_state == target.value
        assert "already settled" in result.error.message
        assert unwrap(journal.get(1)).dispute_state is terminal

    def test_failed_transition_leaves_entry(self) -> None:
        journal = _journal_with()
        before = unwrap(journal.get(1))
        result = journal.transition(1, DisputeState.RESOLVED)
        assert isinstance(result, Err)
        assert "already settled" not in result.error.message
        assert unwrap(journal.get(1)) == before

    def test_transition_table_matches_check(self) -> None:
        """check_transition accepts exactly the pairs in ALLOWED_TRANSITIONS."""
        journal = _journal_with()
        base = unwrap(journal.get(1))
        for src, dst in itertools.product(DisputeState, repeat=2):
            result = journal.check_transition(base.with_state(src), dst)
            assert isinstance(result, Ok) == ((src, dst) in ALLOWED_TRANSITIONS)

    def test_terminal_flags(self) -> None:
        assert DisputeState.RESOLVED.is_terminal
        assert DisputeState.CHARGED_BACK.is_terminal
        assert not DisputeState.NONE.is_terminal
        assert not DisputeState.DISPUTED.is_terminal
