from typing import Any

from pydantic import BaseModel, Field


class DomainAvailability(BaseModel):
    success: bool = True
    domain: str
    available: bool
    status: str = "unknown"
    message: str | None = None
    fallback: bool = False
    data: dict[str, Any] = Field(default_factory=dict)
