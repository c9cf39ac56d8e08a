import logging
import os
import sys
from typing import List, Optional

from engine import LedgerEngine
from errors import LedgerError
from output import write_accounts

LOG_LEVEL_ENV = "TX_LEDGER_LOG_LEVEL"

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    level = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("Usage: tx-ledger <input.csv>", file=sys.stderr)
        return 1

    configure_logging()

    filepath = args[0]
    engine = LedgerEngine()
    try:
        accounts = engine.process_file(filepath)
    except (LedgerError, OSError) as e:
        logger.error(f"Aborting, no output written: {e}")
        return 1

    write_accounts(accounts, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
