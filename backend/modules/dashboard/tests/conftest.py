# backend/modules/dashboard/tests/conftest.py

from typing import List

import pytest

from modules.dashboard.services.dashboard_service import DashboardService
from modules.dashboard.tests.fakes import (
    NOW,
    FakeDirectoryStore,
    FakeOrder,
    FakeOrderStore,
    FakePayment,
    FakePaymentStore,
    FakeRoleResolver,
    InFlightTracker,
)


@pytest.fixture
def tracker() -> InFlightTracker:
    return InFlightTracker()


@pytest.fixture
def orders() -> List[FakeOrder]:
    return []


@pytest.fixture
def payments() -> List[FakePayment]:
    return []


@pytest.fixture
def order_store(orders, tracker) -> FakeOrderStore:
    return FakeOrderStore(orders, tracker)


@pytest.fixture
def payment_store(payments, tracker) -> FakePaymentStore:
    return FakePaymentStore(payments, tracker)


@pytest.fixture
def directory_store(tracker) -> FakeDirectoryStore:
    return FakeDirectoryStore(tracker)


@pytest.fixture
def role_resolver() -> FakeRoleResolver:
    return FakeRoleResolver()


@pytest.fixture
def dashboard_service(order_store, payment_store, directory_store, role_resolver):
    """Dashboard service over in-memory stores with a fixed clock"""
    return DashboardService(
        order_store=order_store,
        payment_store=payment_store,
        directory_store=directory_store,
        role_resolver=role_resolver,
        clock=lambda: NOW,
    )
