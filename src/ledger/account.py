"""Client account balances.

This module owns balance arithmetic for one client. Every operation
either applies fully or raises without touching state.
"""

from __future__ import annotations

from decimal import Decimal

from core.constants import MAX_BALANCE, ZERO_AMOUNT
from core.errors import AccountLockedError, BalanceLimitError, InsufficientFundsError
from core.types import AccountSnapshot


class Account:
    """Mutable balance state for one client.

    ``total`` is derived from ``available + held`` so the two can never
    drift apart.
    """

    def __init__(self, client_id: int) -> None:
        self.client_id = client_id
        self.available = ZERO_AMOUNT
        self.held = ZERO_AMOUNT
        self.locked = False

    @property
    def total(self) -> Decimal:
        """Funds available or held."""
        return self.available + self.held

    def deposit(self, amount: Decimal) -> None:
        """Credit available funds.

        Raises:
            AccountLockedError: If the account is frozen.
            BalanceLimitError: If the total would exceed ``MAX_BALANCE``.
        """
        self._require_unlocked("deposit")
        if self.total + amount > MAX_BALANCE:
            raise BalanceLimitError(
                f"Account {self.client_id} total {self.total} cannot take a deposit of {amount}; "
                f"balances are capped at {MAX_BALANCE}."
            )
        self.available += amount

    def withdraw(self, amount: Decimal) -> None:
        """Debit available funds.

        Raises:
            AccountLockedError: If the account is frozen.
            InsufficientFundsError: If available funds are short.
        """
        self._require_unlocked("withdraw")
        self._require_available(amount, "withdraw")
        self.available -= amount

    def hold(self, amount: Decimal) -> None:
        """Move disputed funds from available to held."""
        self._require_unlocked("hold disputed funds")
        self._require_available(amount, "hold disputed funds")
        self.available -= amount
        self.held += amount

    def release(self, amount: Decimal) -> None:
        """Return resolved funds from held to available."""
        self._require_unlocked("release held funds")
        self.held -= amount
        self.available += amount

    def chargeback(self, amount: Decimal) -> None:
        """Remove held funds from the account and freeze it."""
        self._require_unlocked("charge back")
        self.held -= amount
        self.locked = True

    def snapshot(self) -> AccountSnapshot:
        """Return an immutable view of current balances."""
        return AccountSnapshot(
            client_id=self.client_id,
            available=self.available,
            held=self.held,
            total=self.total,
            locked=self.locked,
        )

    def _require_unlocked(self, operation: str) -> None:
        if self.locked:
            raise AccountLockedError(
                f"Account {self.client_id} is locked after a chargeback; cannot {operation}."
            )

    def _require_available(self, amount: Decimal, operation: str) -> None:
        if self.available < amount:
            raise InsufficientFundsError(
                f"Account {self.client_id} has {self.available} available; "
                f"cannot {operation} {amount}."
            )
