from fastapi import APIRouter, Query

from app.schemas.domain import DomainAvailability
from app.services.domain_availability import DEFAULT_EXTENSIONS, DomainAvailabilityService

router = APIRouter()


@router.get("/availability", response_model=DomainAvailability, summary="Check domain")
async def check_domain_availability(
    domain: str = Query(..., min_length=3, max_length=255),
) -> DomainAvailability:
    """Check whether a single domain can be registered."""
    return DomainAvailabilityService().check_availability(domain.strip().lower())


@router.get(
    "/suggestions",
    response_model=dict[str, DomainAvailability],
    summary="Check name across extensions",
)
async def check_domain_suggestions(
    name: str = Query(..., min_length=1, max_length=63),
    extensions: str = Query(default=",".join(DEFAULT_EXTENSIONS)),
) -> dict[str, DomainAvailability]:
    """Check a base name under several extensions, e.g. ``extensions=com,net``."""
    exts = [e.strip() for e in extensions.split(",") if e.strip()]
    return DomainAvailabilityService().check_with_suggestions(name.strip().lower(), exts)
