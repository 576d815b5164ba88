"""Shared test fixtures for all test modules."""

import contextlib
from datetime import timedelta
from decimal import Decimal

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  registers all tables on Base.metadata
from app.core import database as db_module
from app.core.database import Base, get_db
from app.models.customer import Customer
from app.models.hosting_plan import HostingPlan
from app.models.service import Service, ServiceStatus, ServiceType
from app.models.shared import utc_now

# Create an in-memory SQLite engine with StaticPool so all connections
# share the same database state and there are no file-locking issues.
_test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
_TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_test_engine)


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and truncate all data after.

    Patches the module-level engine and SessionLocal so all application code
    uses the in-memory test database. Clears data after each test.
    """
    original_engine = db_module.engine
    original_session = db_module.SessionLocal
    db_module.engine = _test_engine
    db_module.SessionLocal = _TestSessionLocal

    Base.metadata.create_all(bind=_test_engine)

    yield
    with _test_engine.connect() as conn:
        conn.execute(text("PRAGMA foreign_keys = OFF"))
        for table in reversed(Base.metadata.sorted_tables):
            with contextlib.suppress(OperationalError):
                conn.execute(table.delete())
        conn.execute(text("PRAGMA foreign_keys = ON"))
        conn.commit()

    db_module.engine = original_engine
    db_module.SessionLocal = original_session


@pytest.fixture
def db_session():
    """Create a database session for direct repository testing."""
    gen = get_db()
    db = next(gen)
    try:
        yield db
    finally:
        for _ in gen:
            pass


@pytest.fixture
def customer(db_session):
    c = Customer(name="Budi Santoso", email="budi@example.com", phone="+62811000111")
    db_session.add(c)
    db_session.commit()
    db_session.refresh(c)
    return c


@pytest.fixture
def hosting_plan(db_session):
    plan = HostingPlan(
        plan_name="Business",
        storage_gb=Decimal("20"),
        cpu_cores=Decimal("2"),
        ram_gb=Decimal("2"),
        bandwidth="unlimited",
        selling_price=Decimal("50000"),
        features=["ssl", "daily backup"],
    )
    db_session.add(plan)
    db_session.commit()
    db_session.refresh(plan)
    return plan


@pytest.fixture
def make_service(db_session, customer):
    """Factory for services expiring ``days`` from now."""

    def _make(
        days: float = 10,
        service_type: ServiceType = ServiceType.HOSTING,
        plan=None,
        status: ServiceStatus = ServiceStatus.ACTIVE,
        domain_name: str = "budi.co.id",
        auto_renew: bool = True,
        created_at=None,
    ) -> Service:
        service = Service(
            customer_id=customer.id,
            service_type=service_type.value,
            plan_id=plan.id if plan is not None else None,
            domain_name=domain_name,
            status=status.value,
            expires_at=utc_now() + timedelta(days=days),
            auto_renew=auto_renew,
        )
        if created_at is not None:
            service.created_at = created_at
        db_session.add(service)
        db_session.commit()
        db_session.refresh(service)
        return service

    return _make
