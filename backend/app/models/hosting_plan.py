from sqlalchemy import JSON, Boolean, Column, DateTime, Numeric, String, func

from app.core.database import Base
from app.models.shared import UUIDType, generate_uuid


class HostingPlan(Base):
    __tablename__ = "hosting_plans"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    plan_name = Column(String(100), unique=True, index=True, nullable=False)

    # Resources
    storage_gb = Column(Numeric(10, 2), nullable=False, default=0)
    cpu_cores = Column(Numeric(6, 2), nullable=False, default=0)
    ram_gb = Column(Numeric(6, 2), nullable=False, default=0)
    bandwidth = Column(String(50), nullable=True)

    selling_price = Column(Numeric(12, 2), nullable=False, default=0)
    features = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
