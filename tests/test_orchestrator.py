"""Tests for the dependency orchestrator."""

import asyncio

import pytest

from inventory_client.exceptions import ErrorKind, RequestError
from inventory_client.models import NoticeLevel, Page
from inventory_client.notices import NoticeBoard
from inventory_client.orchestrator import (
    LOGIN_TO_NAVIGATE,
    DependencyOrchestrator,
    required_repositories,
)
from inventory_client.session import Session
from inventory_client.storage import MemoryStore
from inventory_client.store import EntityStores
from tests.conftest import FakeClient


@pytest.fixture
def orchestrator(session: Session, stores: EntityStores, notices: NoticeBoard) -> DependencyOrchestrator:
    return DependencyOrchestrator(session, stores, notices)


def _seed_all(fake_client: FakeClient) -> None:
    fake_client.responses[("GET", "/addresses")] = [{"id": 1, "rua": "Rua A", "numero": 1, "cep": "1"}]
    fake_client.responses[("GET", "/customers")] = [{"id": 1, "nome": "Ana"}]
    fake_client.responses[("GET", "/suppliers")] = [{"id": 1, "cnpj": "11222333000181"}]
    fake_client.responses[("GET", "/products")] = [{"id": 1, "codigo": "C1", "nome": "Cesta"}]
    fake_client.responses[("GET", "/materials")] = [{"id": 1, "nome": "Vime"}]
    fake_client.responses[("GET", "/phones")] = [{"id": 1, "ddd": "11", "numero": "40028922"}]


class TestRequiredRepositories:
    """Tests for the page -> collections table."""

    def test_addresses_always_first(self) -> None:
        for page in Page:
            assert required_repositories(page)[0] == "addresses"

    def test_dashboard(self) -> None:
        assert set(required_repositories(Page.DASHBOARD)) == {
            "addresses",
            "products",
            "materials",
            "suppliers",
            "customers",
        }

    def test_phones_page(self) -> None:
        assert set(required_repositories(Page.PHONES)) == {"addresses", "customers", "phones"}

    def test_addresses_page(self) -> None:
        assert required_repositories(Page.ADDRESSES) == ("addresses",)


class TestEvaluate:
    """Tests for DependencyOrchestrator.evaluate."""

    def test_dashboard_loads(self, orchestrator: DependencyOrchestrator, fake_client: FakeClient) -> None:
        _seed_all(fake_client)

        results = asyncio.run(orchestrator.evaluate())

        assert set(fake_client.paths()) == {"/addresses", "/products", "/materials", "/suppliers", "/customers"}
        assert all(results.values())

    def test_unneeded_lists_are_cleared(
        self, orchestrator: DependencyOrchestrator, stores: EntityStores, fake_client: FakeClient
    ) -> None:
        _seed_all(fake_client)
        asyncio.run(orchestrator.navigate(Page.PHONES))
        assert len(stores.phones) == 1

        asyncio.run(orchestrator.navigate(Page.SUPPLIERS))

        assert len(stores.phones) == 0
        assert len(stores.customers) == 0
        assert len(stores.suppliers) == 1
        assert len(stores.addresses) == 1

    def test_failure_becomes_notice(
        self,
        orchestrator: DependencyOrchestrator,
        fake_client: FakeClient,
        notices: NoticeBoard,
    ) -> None:
        _seed_all(fake_client)
        fake_client.responses[("GET", "/suppliers")] = RequestError("Endpoint down", ErrorKind.TRANSPORT)

        results = asyncio.run(orchestrator.evaluate())

        assert results["suppliers"] is False
        assert results["customers"] is True
        assert notices.latest.level == NoticeLevel.ERROR
        assert notices.latest.message == "Endpoint down"

    def test_unauthenticated_clears(self, notices: NoticeBoard) -> None:
        anonymous = Session(MemoryStore())
        fake_client = FakeClient(anonymous)
        stores = EntityStores.create(fake_client)
        orchestrator = DependencyOrchestrator(anonymous, stores, notices)

        assert asyncio.run(orchestrator.evaluate()) == {}
        assert fake_client.calls == []


class TestAuthTransitions:
    """Tests for logout handling and navigation guard."""

    def test_logout_clears_synchronously(
        self,
        orchestrator: DependencyOrchestrator,
        session: Session,
        stores: EntityStores,
        fake_client: FakeClient,
    ) -> None:
        _seed_all(fake_client)
        asyncio.run(orchestrator.navigate(Page.ITEMS))
        assert len(stores.products) == 1

        session.set_token(None)

        assert not orchestrator.authenticated
        assert sum(stores.summary().values()) == 0
        assert orchestrator.page == Page.DASHBOARD

    def test_navigation_rejected_after_logout(
        self,
        orchestrator: DependencyOrchestrator,
        session: Session,
        notices: NoticeBoard,
        fake_client: FakeClient,
    ) -> None:
        session.set_token(None)
        calls_before = len(fake_client.calls)

        assert asyncio.run(orchestrator.navigate(Page.CUSTOMERS)) is False
        assert orchestrator.page == Page.DASHBOARD
        assert notices.latest.message == LOGIN_TO_NAVIGATE
        assert len(fake_client.calls) == calls_before

    def test_navigate_sets_page(
        self, orchestrator: DependencyOrchestrator, fake_client: FakeClient
    ) -> None:
        assert asyncio.run(orchestrator.navigate(Page.CUSTOMERS)) is True
        assert orchestrator.page == Page.CUSTOMERS
        assert set(fake_client.paths()) == {"/addresses", "/customers"}
