"""Base repository: one backend collection plus its in-memory list."""

from __future__ import annotations

import logging
from typing import Any, Generic, Sequence, TypeVar

from inventory_client.client import RequestClient
from inventory_client.exceptions import ErrorKind, RequestError

logger = logging.getLogger(__name__)

T = TypeVar("T")

LOGIN_REQUIRED = "Log in to load data."


class Repository(Generic[T]):
    """Load-all and create operations for one entity collection.

    The list is ordered newest-first: every ``create`` since the last
    load, newest first, followed by the records of that load in arrival
    order. ``create`` never reloads and ``load_all`` never merges.

    Subclasses set ``path``, ``collection_key`` and ``search_fields`` and
    implement :meth:`from_response` and :meth:`to_payload`.
    """

    path: str = ""
    collection_key: str = ""
    search_fields: tuple[str, ...] = ()

    def __init__(self, client: RequestClient) -> None:
        self.client = client
        self._items: list[T] = []
        # Bumped by clear(); results of calls started before a clear are dropped
        self._generation = 0

    @property
    def name(self) -> str:
        return self.collection_key

    @property
    def items(self) -> tuple[T, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def from_response(self, record: dict) -> T:
        raise NotImplementedError

    def to_payload(self, record: T) -> dict[str, Any]:
        raise NotImplementedError

    def identity(self, record: T) -> Any:
        return getattr(record, "id", None)

    def after_load(self, records: list[T]) -> list[T]:
        """Hook run on freshly loaded records before they replace the list."""
        return records

    def after_create(self, submitted: T, created: T) -> None:
        """Hook run once the backend has accepted a record."""

    async def load_all(self) -> list[T]:
        """Replace the list with the backend's full collection.

        Raises
        ------
        RequestError
            When unauthenticated, or on any transport, parse or status
            failure. The list is left untouched in that case.
        """
        if not self.client.session.is_authenticated():
            raise RequestError(LOGIN_REQUIRED, kind=ErrorKind.STATUS)

        generation = self._generation
        envelope = await self.client.request(self.path)
        rows = self._extract_rows(envelope.data)
        records = self.after_load([self.from_response(row) for row in rows])

        if generation != self._generation:
            logger.info("Discarding %s load that finished after a clear", self.name)
            return records

        self._items = records
        logger.info("Loaded %d %s", len(records), self.name)
        return records

    async def create(self, record: T) -> T:
        """Submit a pre-validated record and prepend the backend's version.

        Returns
        -------
        T
            The authoritative record, carrying the backend-assigned ``id``.
        """
        generation = self._generation
        payload = self.to_payload(record)
        envelope = await self.client.request(self.path, "POST", payload)

        data = envelope.data if isinstance(envelope.data, dict) else {}
        returned = {key: value for key, value in data.items() if value is not None}
        created = self.from_response({**payload, **returned})
        self.after_create(record, created)

        if generation == self._generation:
            self._items.insert(0, created)
        else:
            logger.info("Created %s after a clear; not kept in memory", self.name)
        logger.info("Created %s id=%s", self.name, self.identity(created))
        return created

    def clear(self) -> None:
        self._generation += 1
        self._items = []

    def recent(self, limit: int) -> list[T]:
        """Most recent ``limit`` records, newest first."""
        if limit <= 0:
            return []
        return self._items[:limit]

    def find(self, record_id: int | None) -> T | None:
        if record_id is None:
            return None
        for item in self._items:
            if self.identity(item) == record_id:
                return item
        return None

    def search(self, term: str, fields: Sequence[str] | None = None) -> list[T]:
        """Case-insensitive substring match over ``fields``."""
        query = (term or "").strip().lower()
        if not query:
            return list(self._items)
        names = tuple(fields) if fields else self.search_fields
        return [
            item
            for item in self._items
            if any(query in str(getattr(item, f, "") or "").lower() for f in names)
        ]

    def _extract_rows(self, data: Any) -> list[dict]:
        """Accept a bare list or an object keyed by the collection name."""
        if isinstance(data, dict):
            data = data.get(self.collection_key, [])
        if not isinstance(data, list):
            return []
        return [row for row in data if isinstance(row, dict)]
