import csv
from decimal import Decimal
from typing import Dict, List, TextIO

from models import Account

HEADER = ["client", "available", "held", "total", "locked"]
MIN_PLACES = 4


def format_decimal(value: Decimal) -> str:
    """Format decimal with at least 4 decimal places, keeping any extra precision."""
    places = max(MIN_PLACES, -value.as_tuple().exponent)
    return f"{value:.{places}f}"


def render_rows(accounts: Dict[int, Account]) -> List[List[str]]:
    """One row per account, ordered by client id, total computed here."""
    rows = []
    for client_id in sorted(accounts.keys()):
        account = accounts[client_id]
        rows.append([
            str(client_id),
            format_decimal(account.available),
            format_decimal(account.held),
            format_decimal(account.total),
            str(account.locked).lower(),
        ])
    return rows


def write_accounts(accounts: Dict[int, Account], stream: TextIO) -> None:
    """Write the accounts report. Rows are rendered before anything is written."""
    rows = render_rows(accounts)
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(HEADER)
    writer.writerows(rows)
