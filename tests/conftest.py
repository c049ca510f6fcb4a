import json
import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture

os.environ.setdefault("SESSION_SECRET", "fable-test-secret")


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def fable_bed(request):
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from fable.domain import fable
    from fable.utils.db import drop_db, setup_db

    bed = DomainFixture(fable)
    bed.setup()
    setup_db(fable)

    yield bed

    drop_db(fable)
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(fable_bed):
    """Run each test in the domain context and wipe all stores afterwards."""
    with fable_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()

        for _, broker in current_domain.brokers.items():
            broker._data_reset()

        current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
PRODUCT_DEFAULTS = {
    "name": "Skyline Oversized Tee",
    "price": 500.0,
    "category": "Oversized",
    "sizes": ["S", "M", "L"],
    "images": ["https://cdn.example.com/skyline-front.jpg", "https://cdn.example.com/skyline-back.jpg"],
    "description": "Heavyweight cotton tee with a relaxed drop-shoulder fit.",
    "details": ["240 GSM", "Drop shoulder"],
    "fabric_and_care": "100% cotton. Machine wash cold.",
}

ADDRESS_DEFAULTS = {
    "name": "Asha Rao",
    "line1": "12 MG Road",
    "city": "Bengaluru",
    "state": "Karnataka",
    "zip_code": "560001",
}


@pytest.fixture
def make_product():
    """Create a product through the CreateProduct command and return its id."""
    from protean import current_domain

    from fable.catalogue.management import CreateProduct

    def _make(**overrides):
        data = {**PRODUCT_DEFAULTS, **overrides}
        for list_field in ("sizes", "images", "details"):
            data[list_field] = json.dumps(data[list_field])
        return current_domain.process(CreateProduct(**data), asynchronous=False)

    return _make


@pytest.fixture
def make_customer():
    """Register a customer and return their id."""
    from protean import current_domain

    from fable.identity.registration import RegisterCustomer

    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {"name": "Asha Rao", "phone": f"+91-98450-{counter['n']:05d}", **overrides}
        return current_domain.process(RegisterCustomer(**data), asynchronous=False)

    return _make


@pytest.fixture
def make_address():
    """Add an address to a customer's book and return the address id."""
    from protean import current_domain

    from fable.identity.addresses import AddAddress

    def _make(customer_id, **overrides):
        data = {**ADDRESS_DEFAULTS, **overrides}
        return current_domain.process(AddAddress(customer_id=customer_id, **data), asynchronous=False)

    return _make


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from fable.api import create_app

    return TestClient(create_app())


@pytest.fixture
def auth_headers():
    """Bearer headers for a customer session."""
    from fable.identity.session import issue_token

    def _headers(customer_id):
        return {"Authorization": f"Bearer {issue_token(customer_id)}"}

    return _headers


@pytest.fixture
def admin_headers():
    from fable.identity.session import ADMIN_ROLE, issue_token

    return {"Authorization": f"Bearer {issue_token('store-admin', role=ADMIN_ROLE)}"}
