"""Decimal context and the refined Amount type.

All balance arithmetic runs under LEDGER_DECIMAL_CONTEXT with prec=28,
ROUND_HALF_EVEN, and traps for InvalidOperation/DivisionByZero/Overflow.
Amounts entering the ledger carry at most AMOUNT_PLACES fractional digits;
extra digits are truncated, never rounded up.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_DOWN, ROUND_HALF_EVEN
from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)
from typing import final

from txledger.core.result import Err, Ok

LEDGER_DECIMAL_CONTEXT = Context(
    prec=28,
    rounding=ROUND_HALF_EVEN,
    Emin=-999999,
    Emax=999999,
    capitals=1,
    clamp=0,
    flags=[],
    traps=[InvalidOperation, DivisionByZero, Overflow],
)

AMOUNT_PLACES = 4
ZERO = Decimal(0)

# At most 14 integer digits per amount. With at most 2**32 journaled tx ids
# every balance stays below 1e24, so sums fit prec=28 with 4 fractional
# digits and are exact.
MAX_AMOUNT = Decimal("99999999999999.9999")


def quantizer(places: int = AMOUNT_PLACES) -> Decimal:
    """Decimal('1e-places'), e.g. Decimal('0.0001') for 4 places."""
    return Decimal(1).scaleb(-places)


def quantize_amount(
    raw: Decimal, places: int = AMOUNT_PLACES, rounding: str = ROUND_DOWN,
) -> Ok[Decimal] | Err[str]:
    """Cut raw down to `places` fractional digits. Err on NaN/Infinity/overflow."""
    if not raw.is_finite():
        return Err(f"amount must be finite, got {raw}")
    try:
        with localcontext(LEDGER_DECIMAL_CONTEXT):
            return Ok(raw.quantize(quantizer(places), rounding=rounding))
    except InvalidOperation:
        return Err(f"amount {raw} exceeds {LEDGER_DECIMAL_CONTEXT.prec} significant digits")


def format_amount(value: Decimal, places: int = AMOUNT_PLACES) -> str:
    """Render with exactly `places` fractional digits: 1.5 -> '1.5000'."""
    with localcontext(LEDGER_DECIMAL_CONTEXT):
        return f"{value.quantize(quantizer(places)):f}"


@final
@dataclass(frozen=True, slots=True)
class Amount:
    """Decimal constrained to be > 0 with at most AMOUNT_PLACES fractional digits."""

    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal) or not self.value.is_finite() or not (
            self.value > 0
        ):
            raise TypeError(f"Amount requires finite Decimal > 0, got {self.value!r}")
        if self.value.as_tuple().exponent < -AMOUNT_PLACES:  # type: ignore[operator]
            raise TypeError(
                f"Amount allows at most {AMOUNT_PLACES} fractional digits, got {self.value!r}"
            )
        if self.value > MAX_AMOUNT:
            raise TypeError(f"Amount must be <= {MAX_AMOUNT}, got {self.value!r}")

    @staticmethod
    def parse(
        raw: Decimal, places: int = AMOUNT_PLACES, rounding: str = ROUND_DOWN,
    ) -> Ok[Amount] | Err[str]:
        """Quantize raw, then require 0 < amount <= MAX_AMOUNT."""
        if not isinstance(raw, Decimal):
            return Err(f"Amount requires Decimal, got {type(raw).__name__}")
        match quantize_amount(raw, min(places, AMOUNT_PLACES), rounding):
            case Err(e):
                return Err(e)
            case Ok(q):
                pass
        if q <= 0:
            return Err(f"Amount requires > 0 after truncation to {places} places, got {raw}")
        if q > MAX_AMOUNT:
            return Err(f"Amount must be <= {MAX_AMOUNT}, got {raw}")
        return Ok(Amount(value=q))
