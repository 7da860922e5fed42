"""
Shared fixtures for the sales ledger tests.

Every test gets its own file-backed SQLite database, a clock pinned to
Wednesday 2026-10-14 and a bearer token for one staff member.
"""

import os
import tempfile
import uuid
from datetime import date, datetime, time

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite:///{os.path.join(tempfile.gettempdir(), 'fastsales-test-default.db')}",
)
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from fastsales.core.context import Clock, LedgerContext, get_clock
from fastsales.core.jwt import create_staff_token
from fastsales.database import Base, build_engine, get_db
from fastsales.main import app
from fastsales.models.customers import Customer
from fastsales.models.products import Product

STAFF_ID = uuid.UUID("6f1c2f0e-2d55-4a4e-9d6b-0c7f1d3b9a10")

# Wednesday
TODAY = date(2026, 10, 14)


class FixedClock(Clock):
    def __init__(self, today: date, tz_name: str = "UTC"):
        super().__init__(tz_name)
        self.fixed_today = today

    def now(self) -> datetime:
        return datetime.combine(self.fixed_today, time(12, 0), tzinfo=self.tz)


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'ledger.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FixedClock(TODAY)


@pytest.fixture
def ledger_context(db_session, clock):
    return LedgerContext(db=db_session, clock=clock)


@pytest.fixture
def client(session_factory, clock):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    token = create_staff_token(STAFF_ID)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def catalog(db_session):
    """Two products and one customer in the live catalog."""
    coffee = Product(
        id=str(uuid.uuid4()),
        name="Coffee Beans",
        description="1kg bag",
        price_cents=500,
        stock=40,
        product_type="physical_good",
    )
    machine = Product(
        id=str(uuid.uuid4()),
        name="Espresso Machine",
        description="Countertop",
        price_cents=1200,
        stock=3,
        product_type="physical_good",
    )
    customer = Customer(
        id=str(uuid.uuid4()),
        first_name="Jane",
        last_name="Doe",
        mobile_number="+15550100",
        email="jane@example.com",
    )
    db_session.add_all([coffee, machine, customer])
    db_session.commit()

    return {"coffee": coffee, "machine": machine, "customer": customer}


def make_product(db_session, name, price_cents):
    product = Product(
        id=str(uuid.uuid4()),
        name=name,
        description="",
        price_cents=price_cents,
        stock=0,
        product_type="physical_good",
    )
    db_session.add(product)
    db_session.commit()
    return product


def transaction_payload(lines, **header):
    """Build a create-transaction body from (product_id, quantity, total) tuples."""
    sale_items = [
        {
            "product_id": str(product_id),
            "quantity": quantity,
            "discount": 0,
            "total_cents": total,
            "total_resolved": total,
        }
        for product_id, quantity, total in lines
    ]
    total = sum(line["total_cents"] for line in sale_items)

    payload = {
        "date_and_time": "2026-10-14T09:30:00",
        "sale_items": sale_items,
        "total_cents": total,
        "discount": 0,
        "total_resolved": total,
        "sales_channel": "web",
        "company_branch": "Downtown",
        "car_number": None,
        "receipt_number": "R-0001",
    }
    payload.update(header)
    return payload
