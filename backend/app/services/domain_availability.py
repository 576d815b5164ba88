"""Domain availability lookups against the registrar API.

Any failure talking to the registrar degrades to a local heuristic rather
than an error; the caller can tell by the ``fallback`` flag.
"""

import logging
import re
import time

import httpx

from app.core.config import settings
from app.schemas.domain import DomainAvailability

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = ["com", "net", "org", "id", "co.id"]

# Base names containing these are assumed to be registered already
POPULAR_NAMES = ["google", "facebook", "twitter", "instagram", "youtube", "amazon", "apple"]

_DIGITS_RE = re.compile(r"\d+")


class DomainAvailabilityService:
    """Checks whether domain names can be registered."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        request_delay: float | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.DOMAIN_API_KEY
        self.base_url = (base_url or settings.DOMAIN_API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.DOMAIN_API_TIMEOUT
        self.request_delay = (
            request_delay if request_delay is not None else settings.DOMAIN_API_REQUEST_DELAY
        )

    def check_availability(self, domain: str) -> DomainAvailability:
        """Ask the registrar whether ``domain`` is available.

        Args:
            domain: Full domain name, e.g. ``example.com``.

        Returns:
            The registrar's answer, or a heuristic guess if the API fails.
        """
        headers = {
            "X-API-Key": self.api_key,
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        try:
            with httpx.Client(timeout=self.timeout) as client:
                resp = client.get(
                    f"{self.base_url}/domains/availability",
                    params={"domain": domain},
                    headers=headers,
                )

            if not 200 <= resp.status_code < 300:
                logger.warning(
                    "Domain availability check failed for %s: HTTP %s %s",
                    domain,
                    resp.status_code,
                    resp.text[:200] if resp.text else "",
                )
                return self.fallback_availability(domain)

            data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Domain availability check error for %s: %s", domain, exc)
            return self.fallback_availability(domain)

        if not isinstance(data, dict):
            logger.warning(
                "Domain availability check for %s returned %s, expected an object",
                domain,
                type(data).__name__,
            )
            return self.fallback_availability(domain)

        return DomainAvailability(
            success=True,
            domain=domain,
            available=bool(data.get("available", False)),
            status=str(data.get("status", "unknown")),
            message=data.get("message"),
            data=data,
        )

    def fallback_availability(self, domain: str) -> DomainAvailability:
        """Guess availability: popular names are taken, long or numeric ones are free."""
        base_name = domain.split(".")[0].lower()
        is_popular = any(name in base_name for name in POPULAR_NAMES)
        available = not is_popular and (
            len(base_name) > 8 or _DIGITS_RE.search(base_name) is not None
        )
        return DomainAvailability(
            success=True,
            domain=domain,
            available=available,
            status="available" if available else "taken",
            message="Availability check using fallback method (API unavailable)",
            fallback=True,
        )

    def check_multiple(self, domains: list[str]) -> dict[str, DomainAvailability]:
        results: dict[str, DomainAvailability] = {}
        for index, domain in enumerate(domains):
            if index and self.request_delay > 0:
                time.sleep(self.request_delay)  # registrar rate limit
            results[domain] = self.check_availability(domain)
        return results

    def check_with_suggestions(
        self, base_name: str, extensions: list[str] | None = None
    ) -> dict[str, DomainAvailability]:
        """Check ``base_name`` under each extension (defaults to DEFAULT_EXTENSIONS)."""
        extensions = extensions or DEFAULT_EXTENSIONS
        return self.check_multiple([f"{base_name}.{ext.lstrip('.')}" for ext in extensions])
