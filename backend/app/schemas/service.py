from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.service import ServiceStatus, ServiceType


class ServiceCreate(BaseModel):
    customer_id: UUID
    service_type: ServiceType
    plan_id: UUID | None = None
    domain_name: str = Field(..., min_length=1, max_length=255)
    status: ServiceStatus = ServiceStatus.PENDING
    expires_at: datetime
    auto_renew: bool = True
    service_metadata: dict[str, Any] = Field(default_factory=dict)


class ServiceUpdate(BaseModel):
    plan_id: UUID | None = None
    domain_name: str | None = Field(default=None, min_length=1, max_length=255)
    status: ServiceStatus | None = None
    expires_at: datetime | None = None
    auto_renew: bool | None = None
    service_metadata: dict[str, Any] | None = None


class ServiceResponse(BaseModel):
    id: UUID
    customer_id: UUID
    service_type: str
    plan_id: UUID | None
    domain_name: str
    status: str
    expires_at: datetime
    auto_renew: bool
    service_metadata: dict[str, Any]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
