from decimal import Decimal
from typing import Dict, Optional, Set

from models import Account


class LedgerState:
    """
    Ledger state threaded through the reducer.
    Holds client accounts, the amount history of deposits and withdrawals
    for dispute lookups, and the dispute bookkeeping sets.
    """

    def __init__(self):
        self._accounts: Dict[int, Account] = {}
        self._history: Dict[int, Decimal] = {}
        self._disputed_transaction_ids: Set[int] = set()
        self._charged_back_transaction_ids: Set[int] = set()

    def get_or_create_account(self, client_id: int) -> Account:
        """Get existing account or create an empty one."""
        if client_id not in self._accounts:
            self._accounts[client_id] = Account(client_id=client_id)
        return self._accounts[client_id]

    def record_amount(self, transaction_id: int, amount: Decimal) -> None:
        """Remember the amount of a transaction. The first recorded amount wins."""
        self._history.setdefault(transaction_id, amount)

    def get_amount(self, transaction_id: int) -> Optional[Decimal]:
        return self._history.get(transaction_id)

    def mark_disputed(self, transaction_id: int) -> None:
        self._disputed_transaction_ids.add(transaction_id)

    def is_disputed(self, transaction_id: int) -> bool:
        return transaction_id in self._disputed_transaction_ids

    def clear_dispute(self, transaction_id: int) -> None:
        self._disputed_transaction_ids.discard(transaction_id)

    def mark_charged_back(self, transaction_id: int) -> None:
        self._charged_back_transaction_ids.add(transaction_id)

    def is_charged_back(self, transaction_id: int) -> bool:
        return transaction_id in self._charged_back_transaction_ids

    def get_all_accounts(self) -> Dict[int, Account]:
        """Return all accounts (for final output)."""
        return dict(self._accounts)
