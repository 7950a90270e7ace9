"""HTTP API for the fund ledger."""
