"""Festa fund reconciliation and allocation ledger."""

__version__ = "0.1.0"
