from collections import Counter
from dataclasses import dataclass, field
from decimal import Context, Decimal, localcontext
from enum import Enum
from typing import Optional

# Wide enough that balance arithmetic never rounds.
LEDGER_CONTEXT = Context(prec=64)


class RecordType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class Outcome(Enum):
    APPLIED = "applied"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    UNKNOWN_TRANSACTION = "unknown_transaction"
    NOT_DISPUTED = "not_disputed"
    ALREADY_DISPUTED = "already_disputed"
    CHARGED_BACK = "charged_back"


@dataclass
class Record:
    record_type: RecordType
    client_id: int
    transaction_id: int
    amount: Optional[Decimal] = None

    def __repr__(self) -> str:
        return f"Record({self.record_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class Amounts:
    """
    Funds of one account, split into available and held buckets.
    Total is always derived, never stored.
    """

    available: Decimal = Decimal("0")
    held: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        with localcontext(LEDGER_CONTEXT):
            return self.available + self.held

    def deposit(self, amount: Decimal) -> None:
        self.available += amount

    def withdraw(self, amount: Decimal) -> bool:
        """Debit available funds. No-op returning False if they do not cover the amount."""
        if self.available >= amount:
            self.available -= amount
            return True
        return False

    def hold(self, amount: Decimal) -> None:
        self.available -= amount
        self.held += amount

    def release(self, amount: Decimal) -> None:
        self.held -= amount
        self.available += amount

    def chargeback(self, amount: Decimal) -> None:
        self.held -= amount


@dataclass
class Account:
    client_id: int
    amounts: Amounts = field(default_factory=Amounts)
    locked: bool = False

    @property
    def available(self) -> Decimal:
        return self.amounts.available

    @property
    def held(self) -> Decimal:
        return self.amounts.held

    @property
    def total(self) -> Decimal:
        return self.amounts.total


class ProcessingStats:
    """Counters for applied and skipped records, broken down by outcome."""

    def __init__(self):
        self.outcomes: Counter = Counter()

    def record(self, outcome: Outcome) -> None:
        self.outcomes[outcome] += 1

    @property
    def applied(self) -> int:
        return self.outcomes[Outcome.APPLIED]

    @property
    def skipped(self) -> int:
        return sum(self.outcomes.values()) - self.applied
