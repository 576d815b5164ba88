import logging
from typing import Any

from arq import cron

from app.core.config import settings
from app.core.database import SessionLocal
from app.models.shared import utc_now
from app.repositories.invoice_repository import InvoiceRepository
from app.services.invoice_generation import InvoiceGenerationService
from app.tasks import redis_settings

logger = logging.getLogger(__name__)


async def generate_renewal_invoices_task(
    ctx: dict[str, Any], days_before: int | None = None
) -> int:
    """Background task: create renewal invoices for services nearing expiry.

    Runs daily. Services that fail are logged and left for the next run.
    """
    db = SessionLocal()
    try:
        service = InvoiceGenerationService(db)
        result = service.run_renewals(days_before or settings.RENEWAL_DAYS_BEFORE)
        if result.failed:
            logger.warning(
                "Renewal run left %d service(s) without an invoice", result.failed
            )
        return result.created
    finally:
        db.close()


async def mark_overdue_invoices_task(ctx: dict[str, Any]) -> int:
    """Background task: flag pending invoices whose due date has passed.

    Runs daily.
    """
    db = SessionLocal()
    try:
        count = InvoiceRepository(db).mark_overdue(utc_now())
        if count > 0:
            logger.info("Marked %d invoices as overdue", count)
        return count
    finally:
        db.close()


class WorkerSettings:
    functions = [
        generate_renewal_invoices_task,
        mark_overdue_invoices_task,
    ]
    cron_jobs = [
        cron(generate_renewal_invoices_task, hour={1}, minute={0}),  # daily at 01:00
        cron(mark_overdue_invoices_task, hour={2}, minute={0}),  # daily at 02:00
    ]
    redis_settings = redis_settings
