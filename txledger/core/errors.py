"""Error value hierarchy — no ledger function raises on a bad record.

Every rejection is a frozen dataclass value that can be pattern-matched,
logged, and counted. Base class LedgerError, seven @final subclasses, one
per rejection kind.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import final


@dataclass(frozen=True, slots=True)
class LedgerError:
    """Base error value. NOT @final — has subclasses."""

    message: str
    code: str
    source: str  # "module.function" that produced this error
    tx_id: int | None = None
    client_id: int | None = None

    def with_context(self, context: str) -> LedgerError:
        """Return a copy with context prepended to message."""
        return replace(self, message=f"{context}: {self.message}")

    def to_dict(self) -> dict[str, object]:
        """Serialize to dict with stable keys."""
        return {
            "message": self.message,
            "code": self.code,
            "source": self.source,
            "tx_id": self.tx_id,
            "client_id": self.client_id,
        }


@final
@dataclass(frozen=True, slots=True)
class FieldViolation:
    """Describes a single field validation failure."""

    path: str  # e.g. "amount"
    constraint: str  # e.g. "must be > 0"
    actual_value: str  # e.g. "'-1.5'"


@final
@dataclass(frozen=True, slots=True)
class MalformedRecord(LedgerError):
    """An input row is structurally invalid. Produced by the gateway."""

    fields: tuple[FieldViolation, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            **LedgerError.to_dict(self),
            "fields": [
                {"path": f.path, "constraint": f.constraint, "actual_value": f.actual_value}
                for f in self.fields
            ],
        }


@final
@dataclass(frozen=True, slots=True)
class DuplicateTransaction(LedgerError):
    """A deposit or withdrawal reused an already journaled tx id."""


@final
@dataclass(frozen=True, slots=True)
class UnknownTransaction(LedgerError):
    """A dispute-family record references a tx id that was never journaled."""


@final
@dataclass(frozen=True, slots=True)
class ClientMismatch(LedgerError):
    """A dispute-family record names a different client than the journaled tx."""

    expected_client: int = 0
    actual_client: int = 0

    def to_dict(self) -> dict[str, object]:
        return {
            **LedgerError.to_dict(self),
            "expected_client": self.expected_client,
            "actual_client": self.actual_client,
        }


@final
@dataclass(frozen=True, slots=True)
class InvalidDisputeTransition(LedgerError):
    """Dispute state transition is not allowed."""

    from_state: str = ""
    to_state: str = ""

    def to_dict(self) -> dict[str, object]:
        return {
            **LedgerError.to_dict(self),
            "from_state": self.from_state,
            "to_state": self.to_state,
        }


@final
@dataclass(frozen=True, slots=True)
class InsufficientFunds(LedgerError):
    """A withdrawal asked for more than the available balance."""

    available: Decimal = Decimal(0)
    requested: Decimal = Decimal(0)

    def to_dict(self) -> dict[str, object]:
        return {
            **LedgerError.to_dict(self),
            "available": str(self.available),
            "requested": str(self.requested),
        }


@final
@dataclass(frozen=True, slots=True)
class AccountLocked(LedgerError):
    """The addressed account was frozen by a chargeback."""
