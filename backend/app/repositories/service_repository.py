from datetime import datetime
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.service import Service, ServiceStatus, ServiceType
from app.schemas.service import ServiceCreate, ServiceUpdate


class ServiceRepository:
    """Service directory: read access for billing, CRUD for provisioning."""

    def __init__(self, db: Session):
        self.db = db

    def list_active_expiring(
        self,
        window_start: datetime,
        window_end: datetime,
        require_auto_renew: bool = False,
    ) -> list[Service]:
        """Active services expiring in the half-open window (window_start, window_end]."""
        query = self.db.query(Service).filter(
            Service.status == ServiceStatus.ACTIVE.value,
            Service.expires_at > window_start,
            Service.expires_at <= window_end,
        )
        if require_auto_renew:
            query = query.filter(Service.auto_renew.is_(True))
        return query.order_by(Service.expires_at.asc(), Service.id.asc()).all()

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        customer_id: UUID | None = None,
        service_type: ServiceType | None = None,
        status: ServiceStatus | None = None,
    ) -> list[Service]:
        query = self.db.query(Service)
        if customer_id:
            query = query.filter(Service.customer_id == customer_id)
        if service_type:
            query = query.filter(Service.service_type == service_type.value)
        if status:
            query = query.filter(Service.status == status.value)
        return query.order_by(Service.expires_at.asc()).offset(skip).limit(limit).all()

    def count(
        self,
        customer_id: UUID | None = None,
        service_type: ServiceType | None = None,
        status: ServiceStatus | None = None,
    ) -> int:
        query = self.db.query(Service)
        if customer_id:
            query = query.filter(Service.customer_id == customer_id)
        if service_type:
            query = query.filter(Service.service_type == service_type.value)
        if status:
            query = query.filter(Service.status == status.value)
        return query.count()

    def get_by_id(self, service_id: UUID) -> Service | None:
        return self.db.query(Service).filter(Service.id == service_id).first()

    def create(self, data: ServiceCreate) -> Service:
        values = data.model_dump()
        values["service_type"] = data.service_type.value
        values["status"] = data.status.value
        service = Service(**values)
        self.db.add(service)
        self.db.commit()
        self.db.refresh(service)
        return service

    def update(self, service_id: UUID, data: ServiceUpdate) -> Service | None:
        service = self.get_by_id(service_id)
        if not service:
            return None

        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("status"):
            update_data["status"] = update_data["status"].value

        for key, value in update_data.items():
            setattr(service, key, value)
        self.db.commit()
        self.db.refresh(service)
        return service

    def delete(self, service_id: UUID) -> bool:
        service = self.get_by_id(service_id)
        if not service:
            return False
        self.db.delete(service)
        self.db.commit()
        return True
