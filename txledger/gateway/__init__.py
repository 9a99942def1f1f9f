"""txledger.gateway — CSV ingestion: raw rows to TransactionRecord values."""

from txledger.gateway.parser import normalize_row as normalize_row
from txledger.gateway.parser import parse_record as parse_record
from txledger.gateway.reader import open_input as open_input
from txledger.gateway.reader import read_records as read_records
