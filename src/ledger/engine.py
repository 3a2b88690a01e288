"""Transaction application engine.

This module applies parsed transactions to client accounts in order.
It keeps deposits and withdrawals by id so later dispute rows can
reference them, and enforces the dispute lifecycle:

    settled --dispute--> disputed --resolve--> settled
                         disputed --chargeback--> charged_back (final)

Only deposits can be disputed. A failed transaction raises a
``TallyLedgerError`` and leaves every account unchanged.
"""

from __future__ import annotations

from decimal import Decimal

from core.errors import (
    ClientMismatchError,
    DisputeStateError,
    DuplicateTransactionError,
    TallyLedgerError,
    UnknownAccountError,
    UnknownTransactionError,
)
from core.types import (
    AccountSnapshot,
    DisputeState,
    StoredTransaction,
    Transaction,
    TransactionType,
)
from ledger.account import Account


class LedgerEngine:
    """In-memory ledger of accounts and transaction history."""

    def __init__(self) -> None:
        self._accounts: dict[int, Account] = {}
        self._history: dict[int, StoredTransaction] = {}

    @property
    def history_size(self) -> int:
        """Number of stored deposits and withdrawals."""
        return len(self._history)

    def apply(self, transaction: Transaction) -> None:
        """Apply one transaction.

        Args:
            transaction: Parsed transaction.

        Raises:
            TallyLedgerError: If the transaction is not allowed.
        """
        if transaction.tx_type is TransactionType.DEPOSIT:
            self._deposit(transaction)
        elif transaction.tx_type is TransactionType.WITHDRAWAL:
            self._withdraw(transaction)
        elif transaction.tx_type is TransactionType.DISPUTE:
            self._dispute(transaction)
        elif transaction.tx_type is TransactionType.RESOLVE:
            self._resolve(transaction)
        else:
            self._chargeback(transaction)

    def account(self, client_id: int) -> AccountSnapshot | None:
        """Return one account snapshot, or None for unknown clients."""
        account = self._accounts.get(client_id)
        return account.snapshot() if account else None

    def accounts(self) -> tuple[AccountSnapshot, ...]:
        """Return all account snapshots ordered by client id."""
        return tuple(
            self._accounts[client_id].snapshot() for client_id in sorted(self._accounts)
        )

    def _deposit(self, transaction: Transaction) -> None:
        self._require_new_id(transaction)
        account = self._accounts.get(transaction.client_id) or Account(transaction.client_id)
        account.deposit(_amount_of(transaction))
        self._accounts[transaction.client_id] = account
        self._remember(transaction)

    def _withdraw(self, transaction: Transaction) -> None:
        self._require_new_id(transaction)
        account = self._accounts.get(transaction.client_id)
        if account is None:
            raise UnknownAccountError(
                f"Client {transaction.client_id} has no account; "
                f"cannot withdraw in transaction {transaction.tx_id}."
            )
        account.withdraw(_amount_of(transaction))
        self._remember(transaction)

    def _dispute(self, transaction: Transaction) -> None:
        stored = self._referenced(transaction)
        if stored.tx_type is not TransactionType.DEPOSIT:
            raise DisputeStateError(
                f"Transaction {stored.tx_id} is a {stored.tx_type.value}; "
                "only deposits can be disputed."
            )
        _require_state(stored, DisputeState.SETTLED, "dispute")
        self._accounts[stored.client_id].hold(stored.amount)
        stored.state = DisputeState.DISPUTED

    def _resolve(self, transaction: Transaction) -> None:
        stored = self._referenced(transaction)
        _require_state(stored, DisputeState.DISPUTED, "resolve")
        self._accounts[stored.client_id].release(stored.amount)
        stored.state = DisputeState.SETTLED

    def _chargeback(self, transaction: Transaction) -> None:
        stored = self._referenced(transaction)
        _require_state(stored, DisputeState.DISPUTED, "charge back")
        self._accounts[stored.client_id].chargeback(stored.amount)
        stored.state = DisputeState.CHARGED_BACK

    def _referenced(self, transaction: Transaction) -> StoredTransaction:
        stored = self._history.get(transaction.tx_id)
        if stored is None:
            raise UnknownTransactionError(
                f"Transaction {transaction.tx_id} referenced by "
                f"{transaction.tx_type.value} does not exist."
            )
        if stored.client_id != transaction.client_id:
            raise ClientMismatchError(
                f"Transaction {stored.tx_id} belongs to client {stored.client_id}, "
                f"not client {transaction.client_id}."
            )
        return stored

    def _require_new_id(self, transaction: Transaction) -> None:
        if transaction.tx_id in self._history:
            raise DuplicateTransactionError(
                f"Transaction id {transaction.tx_id} was already used; "
                f"{transaction.tx_type.value} ignored."
            )

    def _remember(self, transaction: Transaction) -> None:
        self._history[transaction.tx_id] = StoredTransaction(
            tx_id=transaction.tx_id,
            client_id=transaction.client_id,
            tx_type=transaction.tx_type,
            amount=_amount_of(transaction),
        )


def _require_state(stored: StoredTransaction, expected: DisputeState, operation: str) -> None:
    if stored.state is not expected:
        raise DisputeStateError(
            f"Cannot {operation} transaction {stored.tx_id}: "
            f"it is {stored.state.value}, expected {expected.value}."
        )


def _amount_of(transaction: Transaction) -> Decimal:
    if transaction.amount is None:
        raise TallyLedgerError(
            f"Transaction {transaction.tx_id} is a {transaction.tx_type.value} "
            "without an amount."
        )
    return transaction.amount
