"""Gateway parser — raw CSV row to TransactionRecord.

parse_record is the single entry point for external transaction data.
Total: always returns Ok or Err, never raises on bad input.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation

from txledger.core.errors import FieldViolation, MalformedRecord
from txledger.core.identifiers import ClientId, TxId
from txledger.core.money import Amount
from txledger.core.result import Err, Ok
from txledger.infra.config import DEFAULT_LEDGER_CONFIG, LedgerConfig
from txledger.ledger.types import RecordType, TransactionRecord

_SOURCE = "gateway.parser.parse_record"


def _clean(raw: Mapping[str | None, object], key: str) -> str | None:
    """Trimmed string value, or None when the column is missing or blank."""
    val = raw.get(key)
    if isinstance(val, str):
        val = val.strip()
        return val or None
    return None


def normalize_row(raw: Mapping[str | None, object]) -> dict[str | None, object]:
    """Lower-case and trim header names so ' Client' and 'client' match."""
    return {
        (k.strip().lower() if isinstance(k, str) else k): v
        for k, v in raw.items()
    }


def _extract_decimal(text: str | None) -> Decimal | None:
    if text is None:
        return None
    try:
        return Decimal(text)
    except InvalidOperation:
        return None


def parse_record(
    raw: Mapping[str | None, object],
    config: LedgerConfig = DEFAULT_LEDGER_CONFIG,
) -> Ok[TransactionRecord] | Err[MalformedRecord]:
    """Parse one row (header name -> cell text) into a TransactionRecord.

    - type is case-insensitive
    - client and tx must be plain non-negative integers within range
    - amount is required for deposit/withdrawal, truncated to
      config.amount_places, and must stay > 0; it is ignored for the
      dispute-family types
    """
    row = normalize_row(raw)
    violations: list[FieldViolation] = []

    # --- type ---
    type_raw = _clean(row, "type")
    kind: RecordType | None = None
    if type_raw is None:
        violations.append(FieldViolation(
            path="type", constraint="required", actual_value=repr(row.get("type")),
        ))
    else:
        try:
            kind = RecordType(type_raw.lower())
        except ValueError:
            violations.append(FieldViolation(
                path="type",
                constraint="must be one of deposit, withdrawal, dispute, resolve, chargeback",
                actual_value=repr(type_raw),
            ))

    # --- ids ---
    client_id: ClientId | None = None
    match ClientId.parse(_clean(row, "client") or "", config.max_client_id):
        case Ok(c):
            client_id = c
        case Err(e):
            violations.append(FieldViolation(
                path="client", constraint=e, actual_value=repr(row.get("client")),
            ))

    tx_id: TxId | None = None
    match TxId.parse(_clean(row, "tx") or "", config.max_tx_id):
        case Ok(t):
            tx_id = t
        case Err(e):
            violations.append(FieldViolation(
                path="tx", constraint=e, actual_value=repr(row.get("tx")),
            ))

    # --- amount ---
    amount: Amount | None = None
    if kind is not None and kind.moves_funds:
        amount_text = _clean(row, "amount")
        dec = _extract_decimal(amount_text)
        if dec is None:
            violations.append(FieldViolation(
                path="amount", constraint=f"required numeric for {kind.value}",
                actual_value=repr(row.get("amount")),
            ))
        else:
            match Amount.parse(dec, config.amount_places, config.amount_rounding):
                case Ok(a):
                    amount = a
                case Err(e):
                    violations.append(FieldViolation(
                        path="amount", constraint=e, actual_value=repr(amount_text),
                    ))

    # --- unexpected trailing cells (csv.DictReader restkey) ---
    extra = row.get(None)
    if isinstance(extra, list) and any(isinstance(v, str) and v.strip() for v in extra):
        violations.append(FieldViolation(
            path="<extra>", constraint="row has more cells than the header",
            actual_value=repr(extra),
        ))

    if violations:
        return Err(MalformedRecord(
            message=f"parse_record failed: {len(violations)} field error(s): "
            + "; ".join(f"{v.path} {v.constraint}" for v in violations),
            code="MALFORMED_RECORD",
            source=_SOURCE,
            tx_id=tx_id.value if tx_id is not None else None,
            client_id=client_id.value if client_id is not None else None,
            fields=tuple(violations),
        ))

    assert kind is not None
    assert client_id is not None
    assert tx_id is not None
    return TransactionRecord.create(kind, client_id, tx_id, amount)
