"""Pytest configuration and fixtures."""

import asyncio
from typing import Any, Callable

import pytest

from inventory_client.client import Envelope
from inventory_client.exceptions import InventoryClientError
from inventory_client.notices import NoticeBoard
from inventory_client.session import Session
from inventory_client.storage import MemoryStore
from inventory_client.store import EntityStores

TOKEN_KEY = "vitoriacestas_token"


class FakeClient:
    """In-memory stand-in for RequestClient.

    ``responses`` maps ``(method, path)`` to the envelope data, an
    exception to raise, or a callable taking the request body.
    ``delay_for`` returns how long a call should take.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self.calls: list[tuple[str, str, Any]] = []
        self.responses: dict[tuple[str, str], Any] = {}
        self.delay_for: Callable[[str, str, Any], float] = lambda method, path, body: 0
        self._next_id = 100

    def next_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def echo(self, body: dict) -> dict:
        """Response handler that returns the body with a new id."""
        return {**body, "id": self.next_id()}

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Envelope:
        self.calls.append((method, path, body))
        delay = self.delay_for(method, path, body)
        if delay:
            await asyncio.sleep(delay)
        default: Any = [] if method == "GET" else self.echo
        response = self.responses.get((method, path), default)
        if isinstance(response, InventoryClientError):
            raise response
        if callable(response):
            response = response(body)
        return Envelope(data=response)

    def paths(self, method: str = "GET") -> list[str]:
        return [path for m, path, _ in self.calls if m == method]


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def storage() -> MemoryStore:
    """Empty durable store."""
    return MemoryStore()


@pytest.fixture
def session(storage: MemoryStore) -> Session:
    """Authenticated session."""
    session = Session(storage)
    session.set_token("test-token")
    return session


@pytest.fixture
def anonymous_session() -> Session:
    """Session without a token, on its own store."""
    return Session(MemoryStore())


@pytest.fixture
def fake_client(session: Session) -> FakeClient:
    """Fake request client on an authenticated session."""
    return FakeClient(session)


@pytest.fixture
def stores(fake_client: FakeClient, storage: MemoryStore) -> EntityStores:
    """All six repositories on the fake client."""
    return EntityStores.create(fake_client, storage)


@pytest.fixture
def notices() -> NoticeBoard:
    """Fresh notice board."""
    return NoticeBoard()
