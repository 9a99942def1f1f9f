"""Validated identifier newtypes: ClientId, TxId.

Each wraps an int validated at construction time via parse(). The ranges
match the wire format: client ids are u16, transaction ids are u32.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, final

from txledger.core.result import Err, Ok


def _parse_int(raw: int | str, name: str, max_value: int) -> Ok[int] | Err[str]:
    if isinstance(raw, bool):
        return Err(f"{name} must be an integer, got bool")
    if isinstance(raw, str):
        text = raw.strip()
        # int() also accepts "1_000" and "+7"; ids are plain digit strings
        if not text.isdigit() or not text.isascii():
            return Err(f"{name} must be a non-negative integer, got {raw!r}")
        value = int(text)
    elif isinstance(raw, int):
        value = raw
    else:
        return Err(f"{name} must be an integer, got {type(raw).__name__}")
    if not 0 <= value <= max_value:
        return Err(f"{name} must be in [0, {max_value}], got {value}")
    return Ok(value)


@final
@dataclass(frozen=True, slots=True, order=True)
class ClientId:
    """Client identifier, 0..65535."""

    value: int

    MAX: ClassVar[int] = 0xFFFF

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int) or not (
            0 <= self.value <= ClientId.MAX
        ):
            raise TypeError(f"ClientId requires int in [0, {ClientId.MAX}], got {self.value!r}")

    @staticmethod
    def parse(raw: int | str, max_value: int = 0xFFFF) -> Ok[ClientId] | Err[str]:
        match _parse_int(raw, "client", min(max_value, ClientId.MAX)):
            case Err(e):
                return Err(e)
            case Ok(v):
                return Ok(ClientId(value=v))


@final
@dataclass(frozen=True, slots=True, order=True)
class TxId:
    """Transaction identifier, 0..4294967295, unique across the stream."""

    value: int

    MAX: ClassVar[int] = 0xFFFFFFFF

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int) or not (
            0 <= self.value <= TxId.MAX
        ):
            raise TypeError(f"TxId requires int in [0, {TxId.MAX}], got {self.value!r}")

    @staticmethod
    def parse(raw: int | str, max_value: int = 0xFFFFFFFF) -> Ok[TxId] | Err[str]:
        match _parse_int(raw, "tx", min(max_value, TxId.MAX)):
            case Err(e):
                return Err(e)
            case Ok(v):
                return Ok(TxId(value=v))
