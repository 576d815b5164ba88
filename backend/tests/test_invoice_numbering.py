"""Tests for invoice number formatting and the per-month sequence counter."""

from datetime import UTC, datetime
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import IntegrityError

from app.core import database as db_module
from app.core.exceptions import InvoiceNumberAllocationError
from app.models.invoice_sequence import InvoiceSequence
from app.repositories.invoice_sequence_repository import InvoiceSequenceRepository
from app.services.invoice_generation import InvoiceGenerationService
from app.services.invoice_numbering import (
    format_invoice_number,
    number_prefix,
    parse_sequence,
    period_key,
)


class TestInvoiceNumberFormat:
    def test_format_pads_month_and_sequence(self):
        moment = datetime(2026, 7, 4, tzinfo=UTC)
        assert format_invoice_number(moment, 12) == "INV-2026-07-0012"

    def test_sequence_beyond_four_digits_is_not_truncated(self):
        moment = datetime(2026, 7, 4, tzinfo=UTC)
        assert format_invoice_number(moment, 10000) == "INV-2026-07-10000"

    def test_prefix_and_period_key(self):
        moment = datetime(2026, 11, 30, 23, 59, tzinfo=UTC)
        assert number_prefix(moment) == "INV-2026-11-"
        assert period_key(moment) == "2026-11"

    def test_parse_sequence(self):
        assert parse_sequence("INV-2026-07-0042") == 42

    @pytest.mark.parametrize("number", ["INV-2026-07", "ORD-2026-07-0001", "INV-26-7-1", ""])
    def test_parse_rejects_malformed_numbers(self, number):
        with pytest.raises(ValueError, match="Malformed invoice number"):
            parse_sequence(number)


class TestInvoiceSequenceRepository:
    def test_first_value_seeded(self, db_session):
        repo = InvoiceSequenceRepository(db_session)

        assert repo.next_value("2026-07", seed=lambda: 0) == 1
        assert repo.next_value("2026-07", seed=lambda: 0) == 2

    def test_seed_only_used_for_missing_row(self, db_session):
        repo = InvoiceSequenceRepository(db_session)
        seed = MagicMock(return_value=41)

        assert repo.next_value("2026-07", seed=seed) == 42
        assert repo.next_value("2026-07", seed=seed) == 43
        seed.assert_called_once()

    def test_periods_are_independent(self, db_session):
        repo = InvoiceSequenceRepository(db_session)

        repo.next_value("2026-07", seed=lambda: 0)
        repo.next_value("2026-07", seed=lambda: 0)

        assert repo.next_value("2026-08", seed=lambda: 0) == 1

    def test_rollback_discards_increment(self, db_session):
        repo = InvoiceSequenceRepository(db_session)
        repo.next_value("2026-07", seed=lambda: 0)
        db_session.commit()

        repo.next_value("2026-07", seed=lambda: 0)
        db_session.rollback()

        assert repo.next_value("2026-07", seed=lambda: 0) == 2

    def test_lost_seed_race_increments_winner_row(self, db_session):
        repo = InvoiceSequenceRepository(db_session)

        def seed_after_other_writer():
            # Another writer creates the row between our UPDATE and our INSERT
            other = db_module.SessionLocal()
            try:
                other.add(InvoiceSequence(period="2026-07", last_value=5))
                other.commit()
            finally:
                other.close()
            return 0

        value = repo.next_value("2026-07", seed=seed_after_other_writer)
        db_session.commit()

        assert value == 6
        assert repo.get("2026-07").last_value == 6

    def test_racing_generators_get_distinct_numbers(self, db_session):
        clock = lambda: datetime(2026, 7, 4, tzinfo=UTC)  # noqa: E731
        other_session = db_module.SessionLocal()
        first = InvoiceGenerationService(db_session, clock=clock)
        second = InvoiceGenerationService(other_session, clock=clock)
        numbers = []

        def seed_while_other_generator_runs(prefix):
            numbers.append(second.generate_invoice_number())
            other_session.commit()
            return None

        try:
            with patch.object(
                first.invoice_repo,
                "find_latest_by_number_prefix",
                side_effect=seed_while_other_generator_runs,
            ):
                numbers.append(first.generate_invoice_number())
            db_session.commit()
        finally:
            other_session.close()

        assert numbers == ["INV-2026-07-0001", "INV-2026-07-0002"]
        assert InvoiceSequenceRepository(db_session).get("2026-07").last_value == 2

    def test_gives_up_after_attempts(self, db_session):
        db_session.query = MagicMock()
        db_session.query.return_value.filter.return_value.update.return_value = 0
        repo = InvoiceSequenceRepository(db_session)
        # Every insert loses the race to a concurrent writer

        db_session.flush = MagicMock(side_effect=IntegrityError("insert", {}, Exception("dup")))
        db_session.rollback = MagicMock()
        db_session.add = MagicMock()

        with pytest.raises(InvoiceNumberAllocationError):
            repo.next_value("2026-07", seed=lambda: 0, attempts=2)

        assert db_session.rollback.call_count == 2

    def test_advance_to_never_lowers_counter(self, db_session):
        db_session.add(InvoiceSequence(period="2026-07", last_value=10))
        db_session.commit()
        repo = InvoiceSequenceRepository(db_session)

        repo.advance_to("2026-07", 5)
        assert repo.get("2026-07").last_value == 10

        repo.advance_to("2026-07", 15)
        assert repo.get("2026-07").last_value == 15

    def test_advance_to_creates_missing_row(self, db_session):
        repo = InvoiceSequenceRepository(db_session)

        repo.advance_to("2026-09", 3)

        assert repo.next_value("2026-09", seed=lambda: 0) == 4
