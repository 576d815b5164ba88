from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field


class HostingPlanCreate(BaseModel):
    plan_name: str = Field(..., min_length=1, max_length=100)
    storage_gb: Decimal = Field(default=Decimal("0"), ge=0)
    cpu_cores: Decimal = Field(default=Decimal("0"), ge=0)
    ram_gb: Decimal = Field(default=Decimal("0"), ge=0)
    bandwidth: str | None = Field(default=None, max_length=50)
    selling_price: Decimal = Field(..., ge=0)
    features: list[str] = Field(default_factory=list)
    is_active: bool = True


class HostingPlanUpdate(BaseModel):
    plan_name: str | None = Field(default=None, min_length=1, max_length=100)
    storage_gb: Decimal | None = Field(default=None, ge=0)
    cpu_cores: Decimal | None = Field(default=None, ge=0)
    ram_gb: Decimal | None = Field(default=None, ge=0)
    bandwidth: str | None = Field(default=None, max_length=50)
    selling_price: Decimal | None = Field(default=None, ge=0)
    features: list[str] | None = None
    is_active: bool | None = None


class HostingPlanResponse(BaseModel):
    id: UUID
    plan_name: str
    storage_gb: Decimal
    cpu_cores: Decimal
    ram_gb: Decimal
    bandwidth: str | None
    selling_price: Decimal
    features: list[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
