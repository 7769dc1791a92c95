"""Trip pool ledger source package."""
