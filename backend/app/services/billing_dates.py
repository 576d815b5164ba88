"""Date arithmetic for renewal billing: due dates and billing cycle buckets."""

from datetime import datetime, timedelta

from app.core.config import settings
from app.models.invoice import BillingCycle
from app.models.shared import as_utc


def months_between(start: datetime, end: datetime) -> int:
    """Whole calendar months from start to end, floored at zero."""
    start = as_utc(start)
    end = as_utc(end)
    months = (end.year - start.year) * 12 + (end.month - start.month)
    # A partial trailing month does not count
    if (end.day, end.time()) < (start.day, start.time()):
        months -= 1
    return max(months, 0)


def billing_cycle_for(now: datetime, expires_at: datetime) -> BillingCycle:
    """Bucket the distance to expiry into a descriptive billing cycle."""
    months = months_between(now, expires_at)
    if months <= 1:
        return BillingCycle.MONTHLY
    if months <= 3:
        return BillingCycle.QUARTERLY
    if months <= 6:
        return BillingCycle.SEMI_ANNUALLY
    return BillingCycle.ANNUALLY


def renewal_due_date(expires_at: datetime) -> datetime:
    return as_utc(expires_at) - timedelta(days=settings.RENEWAL_DUE_DAYS_BEFORE_EXPIRY)


def setup_due_date(issue_date: datetime) -> datetime:
    return as_utc(issue_date) + timedelta(days=settings.SETUP_INVOICE_DUE_DAYS)


def renewal_window(expires_at: datetime) -> tuple[datetime, datetime]:
    """Due-date range in which an existing renewal invoice covers this expiry."""
    expires_at = as_utc(expires_at)
    return renewal_due_date(expires_at), expires_at
