import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import (
    BillingError,
    DuplicateInvoiceError,
    InvoiceNumberAllocationError,
    MissingPriceError,
)
from app.models.invoice import BillingCycle, Invoice, InvoiceType
from app.models.service import Service, ServiceType
from app.models.shared import as_utc, utc_now
from app.repositories.invoice_repository import InvoiceRepository
from app.repositories.invoice_sequence_repository import InvoiceSequenceRepository
from app.repositories.service_repository import ServiceRepository
from app.schemas.invoice import InvoiceCreate
from app.services.billing_dates import (
    billing_cycle_for,
    months_between,
    renewal_due_date,
    renewal_window,
    setup_due_date,
)
from app.services.invoice_numbering import (
    format_invoice_number,
    number_prefix,
    parse_sequence,
    period_key,
)

logger = logging.getLogger(__name__)

_CENT = Decimal("0.01")


@dataclass
class RenewalRunResult:
    """Outcome of one renewal billing run."""

    days_before: int
    created: int = 0
    skipped: int = 0
    failed: int = 0
    invoice_numbers: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


class InvoiceGenerationService:
    """Creates renewal and setup invoices for hosting and domain services.

    The service directory and invoice store default to the SQLAlchemy
    repositories bound to ``db``; callers may inject their own along with a
    clock for deterministic runs.
    """

    def __init__(
        self,
        db: Session,
        service_repo: ServiceRepository | None = None,
        invoice_repo: InvoiceRepository | None = None,
        sequence_repo: InvoiceSequenceRepository | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.db = db
        self.service_repo = service_repo or ServiceRepository(db)
        self.invoice_repo = invoice_repo or InvoiceRepository(db)
        self.sequence_repo = sequence_repo or InvoiceSequenceRepository(db)
        self.clock = clock

    def generate_renewal_invoices(self, days_before: int = settings.RENEWAL_DAYS_BEFORE) -> int:
        """Create renewal invoices for services expiring within ``days_before`` days.

        Returns:
            Number of invoices created.
        """
        return self.run_renewals(days_before).created

    def run_renewals(self, days_before: int = settings.RENEWAL_DAYS_BEFORE) -> RenewalRunResult:
        """Bill every eligible service in the lookahead window.

        Each service is handled on its own: a failure is logged, rolled back
        and counted, and the loop moves on to the next service.
        """
        if isinstance(days_before, bool) or not isinstance(days_before, int) or days_before <= 0:
            raise ValueError("days_before must be a positive integer")

        now = self.clock()
        services = self.service_repo.list_active_expiring(
            window_start=now,
            window_end=now + timedelta(days=days_before),
            require_auto_renew=settings.RENEWAL_REQUIRE_AUTO_RENEW,
        )
        result = RenewalRunResult(days_before=days_before)

        # Ids are read up front: each commit expires the loaded services, and
        # reloading one that was deleted meanwhile must fail inside the try.
        candidates = [(service.id, service) for service in services]

        for service_id, service in candidates:
            try:
                if not self.should_generate_invoice(service):
                    result.skipped += 1
                    continue
                invoice = self.create_renewal_invoice(service)
            except DuplicateInvoiceError:
                result.skipped += 1
                continue
            except (BillingError, SQLAlchemyError) as exc:
                self.db.rollback()
                logger.exception("Failed to generate renewal invoice for service %s", service_id)
                result.failed += 1
                result.errors.append(f"{service_id}: {exc}")
                continue

            result.created += 1
            result.invoice_numbers.append(str(invoice.invoice_number))

        if result.created or result.failed:
            logger.info(
                "Renewal run (%d days): %d created, %d skipped, %d failed",
                days_before,
                result.created,
                result.skipped,
                result.failed,
            )
        return result

    def should_generate_invoice(self, service: Service) -> bool:
        """False when a renewal invoice already falls due in [expiry - 7d, expiry]."""
        window_start, window_end = renewal_window(service.expires_at)  # type: ignore[arg-type]
        return not self.invoice_repo.exists_renewal_invoice_in_window(
            UUID(str(service.id)), window_start, window_end
        )

    def create_renewal_invoice(self, service: Service) -> Invoice:
        now = self.clock()
        expires_at = as_utc(service.expires_at)  # type: ignore[arg-type]

        gross = self.calculate_renewal_amount(service)
        discount = self.calculate_loyalty_discount(service, gross)
        data = InvoiceCreate(
            customer_id=UUID(str(service.customer_id)),
            service_id=UUID(str(service.id)),
            invoice_type=InvoiceType.RENEWAL,
            amount=gross - discount,
            discount=discount,
            billing_cycle=self.determine_billing_cycle(service),
            issue_date=now,
            due_date=renewal_due_date(expires_at),
            period_end=expires_at,
            notes=(
                f"Renewal invoice for {service.domain_name} - {service.service_type} "
                f"service expiring on {expires_at:%d %b %Y}"
            ),
        )
        invoice = self._persist(data)

        logger.info(
            "Generated renewal invoice %s for service %s (%s)",
            invoice.invoice_number,
            service.id,
            service.domain_name,
        )
        return invoice

    def create_setup_invoice(self, service: Service, amount: Decimal | int) -> Invoice:
        amount = Decimal(str(amount))
        if amount < 0:
            raise ValueError("Setup invoice amount must not be negative")

        now = self.clock()
        data = InvoiceCreate(
            customer_id=UUID(str(service.customer_id)),
            service_id=UUID(str(service.id)),
            invoice_type=InvoiceType.SETUP,
            amount=amount,
            billing_cycle=self.determine_billing_cycle(service),
            issue_date=now,
            due_date=setup_due_date(now),
            notes=f"Setup invoice for {service.domain_name} - {service.service_type} service",
        )
        invoice = self._persist(data)

        logger.info("Generated setup invoice %s for service %s", invoice.invoice_number, service.id)
        return invoice

    def calculate_renewal_amount(self, service: Service) -> Decimal:
        if service.service_type == ServiceType.HOSTING.value:
            if service.plan is None:
                raise MissingPriceError(UUID(str(service.id)))
            return Decimal(str(service.plan.selling_price))
        if service.service_type == ServiceType.DOMAIN.value:
            return Decimal(settings.DOMAIN_RENEWAL_PRICE)
        return Decimal(0)

    def calculate_loyalty_discount(self, service: Service, amount: Decimal) -> Decimal:
        """Percentage off for services active at least RENEWAL_LOYALTY_MIN_MONTHS."""
        if amount <= 0 or service.created_at is None:
            return Decimal(0)
        age_months = months_between(service.created_at, self.clock())  # type: ignore[arg-type]
        if age_months < settings.RENEWAL_LOYALTY_MIN_MONTHS:
            return Decimal(0)
        percent = Decimal(settings.RENEWAL_LOYALTY_DISCOUNT_PERCENT) / 100
        return (amount * percent).quantize(_CENT, rounding=ROUND_HALF_UP)

    def determine_billing_cycle(self, service: Service) -> BillingCycle:
        return billing_cycle_for(self.clock(), service.expires_at)  # type: ignore[arg-type]

    def generate_invoice_number(self) -> str:
        """Allocate the next INV-YYYY-MM-NNNN number for the current month."""
        now = self.clock()
        prefix = number_prefix(now)

        def _seed() -> int:
            latest = self.invoice_repo.find_latest_by_number_prefix(prefix)
            if latest is None:
                return 0
            try:
                return parse_sequence(str(latest.invoice_number))
            except ValueError:
                logger.warning("Ignoring malformed invoice number %s", latest.invoice_number)
                return 0

        sequence = self.sequence_repo.next_value(period_key(now), seed=_seed)
        return format_invoice_number(now, sequence)

    def _persist(self, data: InvoiceCreate) -> Invoice:
        """Number and store an invoice, retrying if the number is already taken."""
        max_attempts = settings.INVOICE_NUMBER_MAX_RETRIES
        for attempt in range(1, max_attempts + 1):
            invoice_number = self.generate_invoice_number()
            try:
                return self.invoice_repo.create(data, invoice_number=invoice_number)
            except IntegrityError:
                self.db.rollback()
                if data.period_end is not None and self.invoice_repo.exists_for_period(
                    data.service_id, data.invoice_type, data.period_end
                ):
                    raise DuplicateInvoiceError(data.service_id, data.period_end) from None
                logger.warning(
                    "Invoice number %s already taken (attempt %d/%d)",
                    invoice_number,
                    attempt,
                    max_attempts,
                )
                # The rollback undid our increment; move the counter past the
                # number that collided so the next attempt gets a fresh one.
                self.sequence_repo.advance_to(
                    period_key(self.clock()), parse_sequence(invoice_number)
                )

        raise InvoiceNumberAllocationError(
            f"Could not allocate a unique invoice number after {max_attempts} attempts"
        )
