import csv
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterator, Optional

from errors import RecordParseError
from models import Account, Outcome, ProcessingStats, Record, RecordType
from processor import LedgerProcessor, SkipHook
from state import LedgerState

logger = logging.getLogger(__name__)


class LedgerEngine:
    """
    Reads a transaction CSV and folds it through the ledger processor.
    Rows are decoded and applied one at a time, strictly in file order.
    """

    def __init__(self, on_skip: Optional[SkipHook] = None):
        self._on_skip = on_skip
        self._stats = ProcessingStats()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_file(self, filepath: str) -> Dict[int, Account]:
        """Process CSV file and return final account states."""
        state = LedgerState()
        processor = LedgerProcessor(state, self._on_skip)
        self._stats = ProcessingStats()

        logger.info(f"Processing {filepath}")
        with open(filepath, "r", newline="", encoding="utf-8-sig") as f:
            for record in self._read_records(f):
                self._stats.record(processor.process_record(record))

        logger.info(f"Applied: {self._stats.applied}, Skipped: {self._stats.skipped}")
        for outcome, count in sorted(self._stats.outcomes.items(), key=lambda item: item[0].value):
            if outcome != Outcome.APPLIED:
                logger.debug(f"  {outcome.value}: {count}")

        return state.get_all_accounts()

    def _read_records(self, f) -> Iterator[Record]:
        reader = csv.DictReader(f)
        rows = iter(reader)
        while True:
            try:
                row = next(rows)
            except StopIteration:
                return
            except (UnicodeDecodeError, csv.Error) as e:
                raise RecordParseError(reader.line_num + 1, None, str(e)) from e
            yield self._parse_csv_row(row, reader.line_num)

    def _parse_csv_row(self, row: Dict[str, Optional[str]], line_number: int) -> Record:
        """Parse CSV row into Record."""
        try:
            normalized = {k.strip(): (v or "").strip() for k, v in row.items() if k is not None}

            record_type = RecordType(normalized["type"].lower())
            client_id = int(normalized["client"])
            transaction_id = int(normalized["tx"])
            if client_id < 0 or transaction_id < 0:
                raise ValueError("client and tx must be unsigned")

            amount = None
            amount_str = normalized.get("amount", "")
            if amount_str:
                try:
                    amount = Decimal(amount_str)
                except InvalidOperation:
                    raise ValueError(f"invalid amount {amount_str!r}") from None
                if not amount.is_finite():
                    raise ValueError(f"amount must be finite, got {amount_str}")

            return Record(
                record_type=record_type,
                client_id=client_id,
                transaction_id=transaction_id,
                amount=amount,
            )
        except KeyError as e:
            raise RecordParseError(line_number, row, f"missing column {e}") from e
        except ValueError as e:
            raise RecordParseError(line_number, row, str(e)) from e
