"""Debt Ledger: a small service for recording who owes what."""

__version__ = "0.1.0"
