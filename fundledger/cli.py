"""Command-line access to the fund ledger.

Usage:
    python -m fundledger.cli init-db
    python -m fundledger.cli summary
    python -m fundledger.cli allocate 3 "40,00"
    python -m fundledger.cli edit 12 "55"
    python -m fundledger.cli delete 12
    python -m fundledger.cli history

Exit Codes:
    0 - Success
    1 - Ledger error (invalid input, not found, insufficient remainder)
"""

import argparse
import logging
import sys

from dotenv import load_dotenv

from fundledger.services.config import get_app_config
from fundledger.services.errors import LedgerError
from fundledger.services.logging import setup_server_logging
from fundledger.services.money import format_cents, parse_amount_to_cents

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fundledger", description="Festa fund ledger")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create tables and seed defaults")
    sub.add_parser("summary", help="Show balances and remainders")
    sub.add_parser("history", help="List allocations, newest first")

    allocate = sub.add_parser("allocate", help="Allocate remainder to a beneficiary")
    allocate.add_argument("beneficiary_id", type=int)
    allocate.add_argument("amount", help="Major units, e.g. 40,00")
    allocate.add_argument("--note")

    edit = sub.add_parser("edit", help="Change an allocation amount")
    edit.add_argument("allocation_id", type=int)
    edit.add_argument("amount", help="Major units, e.g. 55")

    delete = sub.add_parser("delete", help="Revert an allocation")
    delete.add_argument("allocation_id", type=int)
    return parser


def run(args: argparse.Namespace, out=None) -> int:
    """Execute one parsed command. Returns the exit code."""
    from fundledger.main import init_database
    from fundledger.services import SessionLocal, engine
    from fundledger.services.allocation_ledger import AllocationLedger
    from fundledger.services.remainder_service import get_remainder_summary
    from fundledger.services.settings_service import load_ledger_settings

    out = out or sys.stdout

    if args.command == "init-db":
        init_database(engine)
        print("Database initialized", file=out)
        return 0

    db = SessionLocal()
    try:
        settings = load_ledger_settings(db)
        ledger = AllocationLedger(db, settings)

        if args.command == "summary":
            for name, value in get_remainder_summary(db, settings).as_dict().items():
                print(f"{name:<28}{format_cents(value):>14}", file=out)
        elif args.command == "history":
            for item in ledger.list_history():
                print(
                    f"#{item.id:<5} {item.created_at:%Y-%m-%d %H:%M}  "
                    f"{item.beneficiary_name:<20}{format_cents(item.amount_cents):>12}",
                    file=out,
                )
        elif args.command == "allocate":
            allocation = ledger.apply(args.beneficiary_id, parse_amount_to_cents(args.amount), note=args.note)
            print(f"Allocation #{allocation.id}: {format_cents(allocation.amount_cents)}", file=out)
        elif args.command == "edit":
            allocation = ledger.edit(args.allocation_id, parse_amount_to_cents(args.amount))
            print(f"Allocation #{allocation.id}: {format_cents(allocation.amount_cents)}", file=out)
        elif args.command == "delete":
            ledger.delete(args.allocation_id)
            print(f"Allocation #{args.allocation_id} deleted", file=out)
        return 0
    except LedgerError as e:
        logger.error(f"{args.command} failed: {e.message}")
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    config = get_app_config()
    setup_server_logging(config.log_file, config.log_level)
    return run(build_parser().parse_args(argv))


if __name__ == "__main__":
    sys.exit(main())
