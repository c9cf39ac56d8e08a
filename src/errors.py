from typing import Dict, Optional


class LedgerError(Exception):
    """Base class for errors that abort a ledger run."""


class MissingAmountError(LedgerError):
    """A deposit or withdrawal arrived without its amount."""

    kind = "Transaction"

    def __init__(self, transaction_id: int):
        self.transaction_id = transaction_id
        super().__init__(f"{self.kind} used but no amount is specified in transaction {transaction_id}")


class DepositMissingAmount(MissingAmountError):
    kind = "Deposit"


class WithdrawalMissingAmount(MissingAmountError):
    kind = "Withdrawal"


class RecordParseError(LedgerError):
    """An input row could not be decoded into a Record."""

    def __init__(self, line_number: int, row: Optional[Dict[str, str]], reason: str):
        self.line_number = line_number
        self.row = row
        self.reason = reason
        super().__init__(f"Malformed record on line {line_number}: {reason} ({row})")
