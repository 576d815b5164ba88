from uuid import UUID

from sqlalchemy.orm import Session

from app.models.hosting_plan import HostingPlan
from app.schemas.hosting_plan import HostingPlanCreate, HostingPlanUpdate


class HostingPlanRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(
        self, skip: int = 0, limit: int = 100, active_only: bool = False
    ) -> list[HostingPlan]:
        query = self.db.query(HostingPlan)
        if active_only:
            query = query.filter(HostingPlan.is_active.is_(True))
        return query.order_by(HostingPlan.selling_price.asc()).offset(skip).limit(limit).all()

    def get_by_id(self, plan_id: UUID) -> HostingPlan | None:
        return self.db.query(HostingPlan).filter(HostingPlan.id == plan_id).first()

    def get_by_name(self, plan_name: str) -> HostingPlan | None:
        return self.db.query(HostingPlan).filter(HostingPlan.plan_name == plan_name).first()

    def create(self, data: HostingPlanCreate) -> HostingPlan:
        plan = HostingPlan(**data.model_dump())
        self.db.add(plan)
        self.db.commit()
        self.db.refresh(plan)
        return plan

    def update(self, plan_id: UUID, data: HostingPlanUpdate) -> HostingPlan | None:
        plan = self.get_by_id(plan_id)
        if not plan:
            return None
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(plan, key, value)
        self.db.commit()
        self.db.refresh(plan)
        return plan
