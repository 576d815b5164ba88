from collections.abc import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import InvoiceNumberAllocationError
from app.models.invoice_sequence import InvoiceSequence


class InvoiceSequenceRepository:
    """Atomic per-period counters backing invoice numbers."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, period: str) -> InvoiceSequence | None:
        return self.db.query(InvoiceSequence).filter(InvoiceSequence.period == period).first()

    def next_value(self, period: str, seed: Callable[[], int], attempts: int = 3) -> int:
        """Increment and return the counter for ``period``.

        The increment is a single UPDATE, so concurrent callers are serialized
        by the row lock and each one sees a distinct value. A missing row is
        created from ``seed()`` (the highest number already issued); if another
        writer inserts it first the primary key rejects ours and we fall back
        to incrementing theirs.

        The change is flushed, not committed: it lands together with the
        invoice that consumes the number.
        """
        for _ in range(attempts):
            updated = (
                self.db.query(InvoiceSequence)
                .filter(InvoiceSequence.period == period)
                .update(
                    {InvoiceSequence.last_value: InvoiceSequence.last_value + 1},
                    synchronize_session=False,
                )
            )
            if updated:
                value = (
                    self.db.query(InvoiceSequence.last_value)
                    .filter(InvoiceSequence.period == period)
                    .scalar()
                )
                return int(value)

            sequence = InvoiceSequence(period=period, last_value=seed() + 1)
            self.db.add(sequence)
            try:
                self.db.flush()
            except IntegrityError:
                self.db.rollback()
                continue
            return int(sequence.last_value)

        raise InvoiceNumberAllocationError(f"Could not allocate a sequence value for {period}")

    def advance_to(self, period: str, value: int) -> None:
        """Raise the counter to at least ``value`` and commit."""
        sequence = self.get(period)
        if sequence is None:
            self.db.add(InvoiceSequence(period=period, last_value=value))
        elif int(sequence.last_value) < value:
            sequence.last_value = value  # type: ignore[assignment]
        self.db.commit()
