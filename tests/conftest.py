"""Hypothesis strategies and pytest fixtures for txledger.

Strategies are composable: record streams are built from amounts and ids.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from hypothesis import HealthCheck, settings
from hypothesis import strategies as st
from hypothesis.strategies import SearchStrategy

from txledger.core.identifiers import ClientId, TxId
from txledger.core.money import Amount
from txledger.ledger.engine import LedgerEngine
from txledger.ledger.types import RecordType, TransactionRecord

# ---------------------------------------------------------------------------
# Hypothesis global settings
# ---------------------------------------------------------------------------

settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.register_profile(
    "dev",
    max_examples=50,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.load_profile("dev")


# ===================================================================
# PRIMITIVE STRATEGIES
# ===================================================================


def amount_decimals(
    min_value: str = "0.0001",
    max_value: str = "100000",
) -> SearchStrategy[Decimal]:
    """Positive Decimals with at most 4 fractional digits."""
    return st.decimals(
        min_value=Decimal(min_value),
        max_value=Decimal(max_value),
        places=4,
        allow_nan=False,
        allow_infinity=False,
    )


def client_ids(max_client: int = 5) -> SearchStrategy[int]:
    """Small client pool so streams actually collide on accounts."""
    return st.integers(min_value=1, max_value=max_client)


# ===================================================================
# RECORD STRATEGIES
# ===================================================================


@st.composite
def funds_records(draw: st.DrawFn, tx_id: int) -> TransactionRecord:
    """A deposit or withdrawal with the given tx id."""
    kind = draw(st.sampled_from([RecordType.DEPOSIT, RecordType.WITHDRAWAL]))
    return TransactionRecord(
        kind=kind,
        client_id=ClientId(draw(client_ids())),
        tx_id=TxId(tx_id),
        amount=Amount(draw(amount_decimals())),
    )


@st.composite
def record_streams(
    draw: st.DrawFn,
    min_size: int = 1,
    max_size: int = 40,
) -> list[TransactionRecord]:
    """Mixed streams: every type, duplicate ids, wrong clients, dangling refs."""
    size = draw(st.integers(min_value=min_size, max_value=max_size))
    records: list[TransactionRecord] = []
    for i in range(1, size + 1):
        kind = draw(st.sampled_from(list(RecordType)))
        if kind.moves_funds:
            # occasionally reuse an earlier id to exercise duplicate handling
            tx = draw(st.integers(min_value=1, max_value=i)) if draw(st.booleans()) else i
            records.append(draw(funds_records(tx)))
        else:
            tx = draw(st.integers(min_value=1, max_value=max(size, 1)))
            records.append(TransactionRecord(
                kind=kind, client_id=ClientId(draw(client_ids())), tx_id=TxId(tx),
            ))
    return records


# ===================================================================
# FIXTURES / HELPERS
# ===================================================================


@pytest.fixture
def engine() -> LedgerEngine:
    return LedgerEngine()
