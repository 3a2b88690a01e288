"""Account ledger.

This module holds per-client balances and the transaction history
used to settle disputes, resolves, and chargebacks.
"""
