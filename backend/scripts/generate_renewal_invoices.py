"""Generate renewal invoices for services expiring soon.

Usage:
    python -m scripts.generate_renewal_invoices --days 30
"""

import argparse
import logging
import sys

from app.core import database
from app.core.config import settings
from app.services.invoice_generation import InvoiceGenerationService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--days",
        type=int,
        default=settings.RENEWAL_DAYS_BEFORE,
        help="Days before expiry to generate invoices (default: %(default)s)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.days <= 0:
        print("--days must be a positive integer", file=sys.stderr)
        return 2

    logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)

    print(f"Generating renewal invoices for services expiring within {args.days} days...")
    db = database.SessionLocal()
    try:
        result = InvoiceGenerationService(db).run_renewals(args.days)
    finally:
        db.close()

    if result.created > 0:
        print(f"Successfully generated {result.created} renewal invoice(s).")
    else:
        print("No renewal invoices need to be generated at this time.")
    if result.failed:
        print(f"{result.failed} service(s) could not be invoiced:", file=sys.stderr)
        for error in result.errors:
            print(f"  {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
