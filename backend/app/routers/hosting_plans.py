from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.hosting_plan import HostingPlan
from app.repositories.hosting_plan_repository import HostingPlanRepository
from app.schemas.hosting_plan import HostingPlanCreate, HostingPlanResponse, HostingPlanUpdate

router = APIRouter()


@router.get("/", response_model=list[HostingPlanResponse], summary="List hosting plans")
async def list_hosting_plans(
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    active_only: bool = False,
    db: Session = Depends(get_db),
) -> list[HostingPlan]:
    return HostingPlanRepository(db).get_all(skip=skip, limit=limit, active_only=active_only)


@router.post(
    "/",
    response_model=HostingPlanResponse,
    status_code=201,
    summary="Create hosting plan",
    responses={409: {"description": "Plan name already exists"}},
)
async def create_hosting_plan(
    data: HostingPlanCreate,
    db: Session = Depends(get_db),
) -> HostingPlan:
    repo = HostingPlanRepository(db)
    if repo.get_by_name(data.plan_name):
        raise HTTPException(status_code=409, detail="Plan name already exists")
    return repo.create(data)


@router.get(
    "/{plan_id}",
    response_model=HostingPlanResponse,
    summary="Get hosting plan",
    responses={404: {"description": "Hosting plan not found"}},
)
async def get_hosting_plan(plan_id: UUID, db: Session = Depends(get_db)) -> HostingPlan:
    plan = HostingPlanRepository(db).get_by_id(plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Hosting plan not found")
    return plan


@router.put(
    "/{plan_id}",
    response_model=HostingPlanResponse,
    summary="Update hosting plan",
    responses={404: {"description": "Hosting plan not found"}},
)
async def update_hosting_plan(
    plan_id: UUID,
    data: HostingPlanUpdate,
    db: Session = Depends(get_db),
) -> HostingPlan:
    plan = HostingPlanRepository(db).update(plan_id, data)
    if not plan:
        raise HTTPException(status_code=404, detail="Hosting plan not found")
    return plan
