import logging
from decimal import localcontext
from typing import Callable, Dict, Iterable, Optional

from errors import DepositMissingAmount, WithdrawalMissingAmount
from models import LEDGER_CONTEXT, Account, Outcome, Record, RecordType
from state import LedgerState

logger = logging.getLogger(__name__)

SkipHook = Callable[[Record, Outcome], None]


class LedgerProcessor:
    """
    Applies records to a LedgerState, one at a time, in arrival order.

    A deposit or withdrawal without an amount raises MissingAmountError.
    Every other mismatch (insufficient funds, unknown or undisputed
    transaction) leaves the state untouched and is reported through the
    returned Outcome, an INFO log line and the optional on_skip hook.
    """

    def __init__(self, state: LedgerState, on_skip: Optional[SkipHook] = None):
        self._state = state
        self._on_skip = on_skip

    def process_record(self, record: Record) -> Outcome:
        # Any record, even one that ends up skipped, opens the client's account.
        account = self._state.get_or_create_account(record.client_id)

        with localcontext(LEDGER_CONTEXT):
            match record.record_type:
                case RecordType.DEPOSIT:
                    outcome = self._handle_deposit(account, record)
                case RecordType.WITHDRAWAL:
                    outcome = self._handle_withdrawal(account, record)
                case RecordType.DISPUTE:
                    outcome = self._handle_dispute(account, record)
                case RecordType.RESOLVE:
                    outcome = self._handle_resolve(account, record)
                case RecordType.CHARGEBACK:
                    outcome = self._handle_chargeback(account, record)
                case _:
                    raise ValueError(f"Unsupported record type: {record.record_type!r}")

        if outcome != Outcome.APPLIED:
            logger.info(f"{record.record_type.value.capitalize()} tx {record.transaction_id} skipped: {outcome.value}")
            if self._on_skip is not None:
                self._on_skip(record, outcome)
        return outcome

    def _handle_deposit(self, account: Account, record: Record) -> Outcome:
        if record.amount is None:
            raise DepositMissingAmount(record.transaction_id)

        account.amounts.deposit(record.amount)
        self._state.record_amount(record.transaction_id, record.amount)
        return Outcome.APPLIED

    def _handle_withdrawal(self, account: Account, record: Record) -> Outcome:
        if record.amount is None:
            raise WithdrawalMissingAmount(record.transaction_id)

        if not account.amounts.withdraw(record.amount):
            return Outcome.INSUFFICIENT_FUNDS
        self._state.record_amount(record.transaction_id, record.amount)
        return Outcome.APPLIED

    def _handle_dispute(self, account: Account, record: Record) -> Outcome:
        amount = self._state.get_amount(record.transaction_id)

        if amount is None:
            return Outcome.UNKNOWN_TRANSACTION

        if self._state.is_charged_back(record.transaction_id):
            return Outcome.CHARGED_BACK

        if self._state.is_disputed(record.transaction_id):
            return Outcome.ALREADY_DISPUTED

        account.amounts.hold(amount)
        self._state.mark_disputed(record.transaction_id)
        return Outcome.APPLIED

    def _handle_resolve(self, account: Account, record: Record) -> Outcome:
        amount = self._state.get_amount(record.transaction_id)

        if amount is None:
            return Outcome.UNKNOWN_TRANSACTION

        if not self._state.is_disputed(record.transaction_id):
            return Outcome.NOT_DISPUTED

        account.amounts.release(amount)
        self._state.clear_dispute(record.transaction_id)
        return Outcome.APPLIED

    def _handle_chargeback(self, account: Account, record: Record) -> Outcome:
        amount = self._state.get_amount(record.transaction_id)

        if amount is None:
            return Outcome.UNKNOWN_TRANSACTION

        if not self._state.is_disputed(record.transaction_id):
            return Outcome.NOT_DISPUTED

        account.amounts.chargeback(amount)
        account.locked = True
        self._state.clear_dispute(record.transaction_id)
        self._state.mark_charged_back(record.transaction_id)
        return Outcome.APPLIED


def apply(state: LedgerState, record: Record, on_skip: Optional[SkipHook] = None) -> LedgerState:
    """Apply a single record to state and return it."""
    LedgerProcessor(state, on_skip).process_record(record)
    return state


def process_records(records: Iterable[Record], on_skip: Optional[SkipHook] = None) -> Dict[int, Account]:
    """Fold records, in order, from an empty ledger and return the final accounts."""
    state = LedgerState()
    processor = LedgerProcessor(state, on_skip)
    for record in records:
        processor.process_record(record)
    return state.get_all_accounts()
