"""Invoice number format: INV-<year>-<MM>-<NNNN>."""

import re
from datetime import datetime

INVOICE_PREFIX = "INV"
SEQUENCE_WIDTH = 4

_NUMBER_RE = re.compile(rf"^{INVOICE_PREFIX}-(\d{{4}})-(\d{{2}})-(\d+)$")


def period_key(moment: datetime) -> str:
    """Year+month bucket the sequence counter is keyed by (YYYY-MM)."""
    return f"{moment.year:04d}-{moment.month:02d}"


def number_prefix(moment: datetime) -> str:
    return f"{INVOICE_PREFIX}-{moment.year:04d}-{moment.month:02d}-"


def format_invoice_number(moment: datetime, sequence: int) -> str:
    return f"{number_prefix(moment)}{sequence:0{SEQUENCE_WIDTH}d}"


def parse_sequence(invoice_number: str) -> int:
    """Extract the trailing sequence from an invoice number.

    Raises ValueError for numbers that don't follow the INV-YYYY-MM-NNNN format.
    """
    match = _NUMBER_RE.match(invoice_number)
    if not match:
        raise ValueError(f"Malformed invoice number: {invoice_number!r}")
    return int(match.group(3))
