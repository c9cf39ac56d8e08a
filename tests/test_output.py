import sys
import os
import io
from decimal import Decimal

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models import Account, Amounts
from output import format_decimal, write_accounts


class TestFormatDecimal:
    @pytest.mark.parametrize("value, expected", [
        ("0", "0.0000"),
        ("1.5", "1.5000"),
        ("-30.0", "-30.0000"),
        ("1.2345", "1.2345"),
        ("0.12345", "0.12345"),
        ("100", "100.0000"),
        ("1E+2", "100.0000"),
        ("10000000000000000000000000", "10000000000000000000000000.0000"),
        ("12345678901234567890123456789.12345", "12345678901234567890123456789.12345"),
    ])
    def test_format(self, value, expected):
        assert format_decimal(Decimal(value)) == expected


class TestWriteAccounts:
    def test_rows_sorted_with_derived_total(self):
        accounts = {
            2: Account(client_id=2, amounts=Amounts(available=Decimal("1.5"), held=Decimal("0.25")), locked=True),
            1: Account(client_id=1, amounts=Amounts(available=Decimal("2"))),
        }
        stream = io.StringIO()

        write_accounts(accounts, stream)

        assert stream.getvalue().splitlines() == [
            "client,available,held,total,locked",
            "1,2.0000,0.0000,2.0000,false",
            "2,1.5000,0.2500,1.7500,true",
        ]

    def test_no_accounts_writes_header_only(self):
        stream = io.StringIO()
        write_accounts({}, stream)
        assert stream.getvalue() == "client,available,held,total,locked\n"

    def test_large_balances_written_in_full(self):
        accounts = {
            1: Account(client_id=1, amounts=Amounts(
                available=Decimal("10000000000000000000000000.0001"),
                held=Decimal("90000000000000000000000000"),
            )),
        }
        stream = io.StringIO()

        write_accounts(accounts, stream)

        assert stream.getvalue().splitlines()[1] == (
            "1,10000000000000000000000000.0001,90000000000000000000000000.0000,"
            "100000000000000000000000000.0001,false"
        )
