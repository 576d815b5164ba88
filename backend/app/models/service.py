from enum import Enum

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, String, func
from sqlalchemy.orm import relationship

from app.core.database import Base
from app.models.shared import UUIDType, generate_uuid


class ServiceType(str, Enum):
    HOSTING = "hosting"
    DOMAIN = "domain"


class ServiceStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"
    TERMINATED = "terminated"
    EXPIRED = "expired"


class Service(Base):
    __tablename__ = "services"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    customer_id = Column(
        UUIDType, ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    service_type = Column(String(20), nullable=False)
    plan_id = Column(
        UUIDType, ForeignKey("hosting_plans.id", ondelete="SET NULL"), nullable=True
    )
    domain_name = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default=ServiceStatus.PENDING.value, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    auto_renew = Column(Boolean, nullable=False, default=True)
    service_metadata = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    plan = relationship("HostingPlan", lazy="joined")
