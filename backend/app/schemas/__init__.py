from app.schemas.customer import CustomerCreate, CustomerResponse, CustomerUpdate
from app.schemas.domain import DomainAvailability
from app.schemas.hosting_plan import HostingPlanCreate, HostingPlanResponse, HostingPlanUpdate
from app.schemas.invoice import (
    InvoiceCreate,
    InvoiceResponse,
    InvoiceStatistics,
    InvoiceUpdate,
    MarkPaidRequest,
    RenewalRunResponse,
    SetupInvoiceRequest,
)
from app.schemas.service import ServiceCreate, ServiceResponse, ServiceUpdate

__all__ = [
    "CustomerCreate",
    "CustomerResponse",
    "CustomerUpdate",
    "DomainAvailability",
    "HostingPlanCreate",
    "HostingPlanResponse",
    "HostingPlanUpdate",
    "InvoiceCreate",
    "InvoiceResponse",
    "InvoiceStatistics",
    "InvoiceUpdate",
    "MarkPaidRequest",
    "RenewalRunResponse",
    "SetupInvoiceRequest",
    "ServiceCreate",
    "ServiceResponse",
    "ServiceUpdate",
]
