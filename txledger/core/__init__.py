"""txledger.core — public API for all core types."""

from txledger.core.errors import AccountLocked as AccountLocked
from txledger.core.errors import ClientMismatch as ClientMismatch
from txledger.core.errors import DuplicateTransaction as DuplicateTransaction
from txledger.core.errors import FieldViolation as FieldViolation
from txledger.core.errors import InsufficientFunds as InsufficientFunds
from txledger.core.errors import InvalidDisputeTransition as InvalidDisputeTransition
from txledger.core.errors import LedgerError as LedgerError
from txledger.core.errors import MalformedRecord as MalformedRecord
from txledger.core.errors import UnknownTransaction as UnknownTransaction
from txledger.core.identifiers import ClientId as ClientId
from txledger.core.identifiers import TxId as TxId
from txledger.core.money import AMOUNT_PLACES as AMOUNT_PLACES
from txledger.core.money import LEDGER_DECIMAL_CONTEXT as LEDGER_DECIMAL_CONTEXT
from txledger.core.money import MAX_AMOUNT as MAX_AMOUNT
from txledger.core.money import Amount as Amount
from txledger.core.money import format_amount as format_amount
from txledger.core.money import quantize_amount as quantize_amount
from txledger.core.result import Err as Err
from txledger.core.result import Ok as Ok
from txledger.core.result import Result as Result
from txledger.core.result import unwrap as unwrap
