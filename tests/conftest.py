import os

import pytest

# Settings are read once at import time; point them at a private in-memory database first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENABLE_METRICS"] = "false"
os.environ["DEFAULT_PAGE_SIZE"] = "10"
os.environ["MAX_PAGE_SIZE"] = "100"

from fastapi.testclient import TestClient

from crm.db.models import Base
from crm.db.session import SessionLocal, engine
from crm.main import app


@pytest.fixture(autouse=True)
def fresh_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def make_customer(client):
    def _make(first_name="Jane", last_name="Doe", phone_number="9876543210"):
        r = client.post(
            "/api/v1/customers",
            json={"first_name": first_name, "last_name": last_name, "phone_number": phone_number},
        )
        assert r.status_code == 201, r.json()
        return r.json()["id"]

    return _make


@pytest.fixture()
def make_address(client):
    def _make(customer_id, address_details="221B Baker St", city="Mumbai", state="MH", pin_code="400001"):
        r = client.post(
            f"/api/v1/customers/{customer_id}/addresses",
            json={"address_details": address_details, "city": city, "state": state, "pin_code": pin_code},
        )
        assert r.status_code == 201, r.json()
        return r.json()["id"]

    return _make
