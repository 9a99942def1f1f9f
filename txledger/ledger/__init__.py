"""txledger.ledger — Ledger domain types, journal, and engine."""

from txledger.ledger.engine import LedgerEngine as LedgerEngine
from txledger.ledger.journal import TransactionJournal as TransactionJournal
from txledger.ledger.types import ALLOWED_TRANSITIONS as ALLOWED_TRANSITIONS
from txledger.ledger.types import AccountState as AccountState
from txledger.ledger.types import AccountView as AccountView
from txledger.ledger.types import DisputeState as DisputeState
from txledger.ledger.types import EntryKind as EntryKind
from txledger.ledger.types import JournalEntry as JournalEntry
from txledger.ledger.types import RecordType as RecordType
from txledger.ledger.types import TransactionRecord as TransactionRecord
