"""txledger.infra — configuration and logging setup."""

from txledger.infra.config import DEFAULT_LEDGER_CONFIG as DEFAULT_LEDGER_CONFIG
from txledger.infra.config import INPUT_FIELDS as INPUT_FIELDS
from txledger.infra.config import OUTPUT_FIELDS as OUTPUT_FIELDS
from txledger.infra.config import LedgerConfig as LedgerConfig
from txledger.infra.config import LoggingConfig as LoggingConfig
from txledger.infra.logging import setup_logging as setup_logging
