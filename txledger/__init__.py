"""txledger — client balance ledger with deposit, withdrawal and dispute handling."""

__version__ = "0.1.0"
