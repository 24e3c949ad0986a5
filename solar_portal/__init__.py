"""Solar Portal - commission rule resolution and payout reconciliation."""

__version__ = "1.0.0"
