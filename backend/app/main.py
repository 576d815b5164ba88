from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.routers import customers, domains, hosting_plans, invoices, services

OPENAPI_TAGS = [
    {"name": "Customers", "description": "Create, read and update customers."},
    {"name": "Hosting Plans", "description": "Manage hosting plans and their prices."},
    {"name": "Services", "description": "Hosting and domain services owned by customers."},
    {"name": "Invoices", "description": "Renewal and setup invoices and their lifecycle."},
    {"name": "Domains", "description": "Domain availability lookups."},
]

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    description=(
        "Billing API for a hosting and domain reseller. "
        "Manage customers, hosting plans, services and invoices, "
        "and generate renewal invoices for services nearing expiry."
    ),
    openapi_tags=OPENAPI_TAGS,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Total-Count"],
)

app.include_router(customers.router, prefix="/v1/customers", tags=["Customers"])
app.include_router(hosting_plans.router, prefix="/v1/hosting_plans", tags=["Hosting Plans"])
app.include_router(services.router, prefix="/v1/services", tags=["Services"])
app.include_router(invoices.router, prefix="/v1/invoices", tags=["Invoices"])
app.include_router(domains.router, prefix="/v1/domains", tags=["Domains"])


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "app": settings.APP_NAME,
        "version": settings.version,
        "domain": settings.APP_DOMAIN,
        "status": "running",
    }
