"""Property tests over arbitrary record streams.

Balance identity: total == available + held for every account at every step.
Held funds:       held >= 0 at every step.
Lock finality:    a locked account's view never changes again.
Atomicity:        a rejected record changes neither accounts nor journal.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal

from conftest import amount_decimals, client_ids, funds_records, record_streams
from hypothesis import given
from hypothesis import strategies as st

from txledger.core.result import Err, Ok
from txledger.ledger.engine import LedgerEngine
from txledger.ledger.types import AccountView, RecordType, TransactionRecord


def _run_checked(records: list[TransactionRecord]) -> LedgerEngine:
    """Process records, asserting the per-step invariants after each one."""
    engine = LedgerEngine()
    locked_views: dict[int, AccountView] = {}
    for record in records:
        before = engine.snapshot()
        journaled = len(engine.journal)
        result = engine.process(record)
        after = engine.snapshot()

        if isinstance(result, Err):
            assert after == before
            assert len(engine.journal) == journaled

        for view in after:
            assert view.held >= 0
            assert view.total == view.available + view.held
            if view.client_id in locked_views:
                assert view == locked_views[view.client_id]
            elif view.locked:
                locked_views[view.client_id] = view
    return engine


class TestStepInvariants:
    @given(records=record_streams())
    def test_invariants_hold_for_any_stream(self, records: list[TransactionRecord]) -> None:
        _run_checked(records)

    @given(records=record_streams())
    def test_replay_is_deterministic(self, records: list[TransactionRecord]) -> None:
        first, second = LedgerEngine(), LedgerEngine()
        r1 = [first.process(r) for r in records]
        r2 = [second.process(r) for r in records]
        assert r1 == r2
        assert first.snapshot() == second.snapshot()


class TestFundsOnly:
    @given(data=st.data(), size=st.integers(min_value=1, max_value=30))
    def test_available_is_deposits_minus_accepted_withdrawals(
        self, data: st.DataObject, size: int,
    ) -> None:
        records = [data.draw(funds_records(i)) for i in range(1, size + 1)]
        engine = LedgerEngine()
        expected: dict[int, Decimal] = defaultdict(Decimal)
        for record in records:
            assert record.amount is not None
            match engine.process(record):
                case Ok(_):
                    sign = 1 if record.kind is RecordType.DEPOSIT else -1
                    expected[record.client_id.value] += sign * record.amount.value
                case Err(_):
                    assert record.kind is RecordType.WITHDRAWAL

        for view in engine.snapshot():
            assert view.available == expected[view.client_id]
            assert view.available >= 0
            assert view.held == 0
            assert view.total == view.available
            assert not view.locked


class TestDisputeRoundTrips:
    @given(
        client=client_ids(),
        amounts=st.lists(amount_decimals(), min_size=1, max_size=8),
        pick=st.integers(min_value=0, max_value=7),
    )
    def test_dispute_then_resolve_is_identity(
        self, client: int, amounts: list[Decimal], pick: int,
    ) -> None:
        engine = LedgerEngine()
        for i, amt in enumerate(amounts, start=1):
            engine.process(TransactionRecord.deposit(client, i, str(amt)))
        target = (pick % len(amounts)) + 1
        before = engine.get_account(client)

        assert engine.process(TransactionRecord.dispute(client, target)) == Ok(None)
        assert engine.process(TransactionRecord.resolve(client, target)) == Ok(None)
        assert engine.get_account(client) == before

    @given(
        client=client_ids(),
        amounts=st.lists(amount_decimals(), min_size=1, max_size=8),
        pick=st.integers(min_value=0, max_value=7),
    )
    def test_dispute_then_chargeback_removes_amount_and_locks(
        self, client: int, amounts: list[Decimal], pick: int,
    ) -> None:
        engine = LedgerEngine()
        for i, amt in enumerate(amounts, start=1):
            engine.process(TransactionRecord.deposit(client, i, str(amt)))
        idx = pick % len(amounts)
        disputed = amounts[idx]
        before = engine.get_account(client)
        assert before is not None

        engine.process(TransactionRecord.dispute(client, idx + 1))
        engine.process(TransactionRecord.chargeback(client, idx + 1))
        after = engine.get_account(client)
        assert after is not None
        assert after.locked
        assert after.held == 0
        assert after.available == before.available - disputed
        assert after.total == before.total - disputed

    @given(
        client=client_ids(),
        amount=amount_decimals(),
        finish=st.sampled_from([TransactionRecord.resolve, TransactionRecord.chargeback]),
    )
    def test_redispute_never_moves_money(self, client: int, amount: Decimal, finish) -> None:  # type: ignore[no-untyped-def]
        engine = LedgerEngine()
        engine.process(TransactionRecord.deposit(client, 1, str(amount)))
        engine.process(TransactionRecord.dispute(client, 1))
        engine.process(finish(client, 1))
        before = engine.get_account(client)
        assert isinstance(engine.process(TransactionRecord.dispute(client, 1)), Err)
        assert engine.get_account(client) == before
