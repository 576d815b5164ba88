"""Tests for worker background tasks and cron job registration."""

from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest

from app.core import database as db_module
from app.models.invoice import Invoice, InvoiceStatus
from app.models.shared import utc_now
from app.services.invoice_generation import RenewalRunResult
from app.worker import (
    WorkerSettings,
    generate_renewal_invoices_task,
    mark_overdue_invoices_task,
)


class TestGenerateRenewalInvoicesTask:
    """Tests for the generate_renewal_invoices_task worker function."""

    @pytest.mark.asyncio
    async def test_returns_created_count(self):
        """Test that the task runs the generator and returns the number created."""
        mock_service = MagicMock()
        mock_service.run_renewals.return_value = RenewalRunResult(days_before=30, created=4)

        with patch("app.worker.InvoiceGenerationService", return_value=mock_service):
            result = await generate_renewal_invoices_task({})

        assert result == 4
        mock_service.run_renewals.assert_called_once_with(30)

    @pytest.mark.asyncio
    async def test_passes_custom_window(self):
        mock_service = MagicMock()
        mock_service.run_renewals.return_value = RenewalRunResult(days_before=14)

        with patch("app.worker.InvoiceGenerationService", return_value=mock_service):
            result = await generate_renewal_invoices_task({}, days_before=14)

        assert result == 0
        mock_service.run_renewals.assert_called_once_with(14)

    @pytest.mark.asyncio
    async def test_logs_failures(self, caplog):
        mock_service = MagicMock()
        mock_service.run_renewals.return_value = RenewalRunResult(
            days_before=30, created=1, failed=2
        )

        with patch("app.worker.InvoiceGenerationService", return_value=mock_service):
            result = await generate_renewal_invoices_task({})

        assert result == 1
        assert "2 service(s) without an invoice" in caplog.text

    @pytest.mark.asyncio
    async def test_closes_session_on_exception(self):
        """Test that the DB session is closed even when an exception occurs."""
        mock_session = MagicMock()
        mock_service = MagicMock()
        mock_service.run_renewals.side_effect = RuntimeError("DB error")

        with (
            patch("app.worker.SessionLocal", return_value=mock_session),
            patch("app.worker.InvoiceGenerationService", return_value=mock_service),
            pytest.raises(RuntimeError, match="DB error"),
        ):
            await generate_renewal_invoices_task({})

        mock_session.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_integration_with_real_service(self, db_session, make_service, hosting_plan):
        """Integration test: task invoices an expiring service against the real DB."""
        service = make_service(days=5, plan=hosting_plan)

        with patch("app.worker.SessionLocal", db_module.SessionLocal):
            result = await generate_renewal_invoices_task({})
            again = await generate_renewal_invoices_task({})

        assert result == 1
        assert again == 0
        invoices = db_session.query(Invoice).filter(Invoice.service_id == service.id).all()
        assert len(invoices) == 1


class TestMarkOverdueInvoicesTask:
    """Tests for the mark_overdue_invoices_task worker function."""

    @pytest.mark.asyncio
    async def test_returns_zero_when_nothing_overdue(self):
        with patch("app.worker.SessionLocal", db_module.SessionLocal):
            result = await mark_overdue_invoices_task({})
        assert result == 0

    @pytest.mark.asyncio
    async def test_marks_past_due_invoices(self, db_session, make_service, hosting_plan):
        service = make_service(days=5, plan=hosting_plan)
        now = utc_now()
        invoice = Invoice(
            invoice_number="INV-2026-10-0001",
            invoice_type="renewal",
            service_id=service.id,
            customer_id=service.customer_id,
            status=InvoiceStatus.PENDING.value,
            amount=50000,
            billing_cycle="monthly",
            issue_date=now - timedelta(days=10),
            due_date=now - timedelta(days=1),
        )
        db_session.add(invoice)
        db_session.commit()

        with patch("app.worker.SessionLocal", db_module.SessionLocal):
            result = await mark_overdue_invoices_task({})

        assert result == 1
        db_session.refresh(invoice)
        assert invoice.status == InvoiceStatus.OVERDUE.value


class TestWorkerSettings:
    """Tests for WorkerSettings configuration."""

    def _job(self, name):
        for job in WorkerSettings.cron_jobs:
            if job.coroutine.__name__ == name:
                return job
        return None

    def test_functions_registered(self):
        func_names = [f.__name__ for f in WorkerSettings.functions]
        assert "generate_renewal_invoices_task" in func_names
        assert "mark_overdue_invoices_task" in func_names

    def test_renewal_cron_runs_daily_at_one(self):
        job = self._job("generate_renewal_invoices_task")
        assert job is not None
        assert job.hour == {1}
        assert job.minute == {0}

    def test_overdue_cron_runs_daily_at_two(self):
        job = self._job("mark_overdue_invoices_task")
        assert job is not None
        assert job.hour == {2}
        assert job.minute == {0}

    def test_redis_settings_configured(self):
        """Test that redis settings are properly configured."""
        from app.tasks import redis_settings

        assert WorkerSettings.redis_settings is redis_settings
