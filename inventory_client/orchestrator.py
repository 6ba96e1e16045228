"""Decide which repositories to (re)load on page and session changes.

Addresses are loaded for every page because customer and supplier forms
select from them. Loads in one transition run concurrently and in no
particular order; forms simply read whatever is in memory at the time.
"""

from __future__ import annotations

import asyncio
import logging

from inventory_client.exceptions import InventoryClientError
from inventory_client.models.enums import Page
from inventory_client.notices import NoticeBoard
from inventory_client.session import Session
from inventory_client.store import EntityStores, Repository

logger = logging.getLogger(__name__)

LOGIN_TO_NAVIGATE = "Log in to access this page."

PAGE_DEPENDENCIES: dict[Page, tuple[str, ...]] = {
    Page.DASHBOARD: ("products", "materials", "suppliers", "customers"),
    Page.ITEMS: ("products", "materials", "suppliers", "customers"),
    Page.SUPPLIERS: ("suppliers",),
    Page.CUSTOMERS: ("customers",),
    Page.PHONES: ("customers", "phones"),
    Page.ADDRESSES: (),
}


def required_repositories(page: Page) -> tuple[str, ...]:
    """Collections a page needs, addresses first."""
    return ("addresses",) + PAGE_DEPENDENCIES[Page(page)]


class DependencyOrchestrator:
    """State machine over ``(page, authenticated)``."""

    def __init__(
        self,
        session: Session,
        stores: EntityStores,
        notices: NoticeBoard,
        page: Page = Page.DASHBOARD,
    ) -> None:
        self.session = session
        self.stores = stores
        self.notices = notices
        self.page = page
        self.authenticated = session.is_authenticated()
        session.subscribe(self._on_auth_change)

    def _on_auth_change(self, authenticated: bool) -> None:
        # Runs inside Session.set_token, so logout clears in the same step
        self.authenticated = authenticated
        if not authenticated:
            self.stores.clear_all()
            self.page = Page.DASHBOARD
            logger.info("Session ended; cleared every entity list")

    async def evaluate(self) -> dict[str, bool]:
        """Apply the transition rule for the current state.

        Returns
        -------
        dict[str, bool]
            Collection name -> whether its load succeeded. Empty when
            unauthenticated.
        """
        if not self.authenticated:
            self.stores.clear_all()
            return {}

        needed = required_repositories(self.page)
        for name, repository in self.stores.repositories().items():
            if name not in needed:
                repository.clear()

        names = list(needed)
        logger.info("Loading %s for page %s", ", ".join(names), self.page.value)
        results = await asyncio.gather(*(self._load(self.stores.get(name)) for name in names))
        return dict(zip(names, results))

    async def navigate(self, page: Page) -> bool:
        """Switch page and reload its dependencies.

        Rejected with a notice, leaving the page unchanged, while the
        session is unauthenticated.
        """
        if not self.authenticated:
            self.notices.warning(LOGIN_TO_NAVIGATE)
            return False
        self.page = Page(page)
        await self.evaluate()
        return True

    async def _load(self, repository: Repository) -> bool:
        try:
            await repository.load_all()
        except InventoryClientError as exc:
            logger.warning("Loading %s failed: %s", repository.name, exc)
            self.notices.error(exc.message)
            return False
        return True
