"""Application object wiring the session, repositories, forms and notices."""

from __future__ import annotations

import logging

import requests

from inventory_client.client import RequestClient
from inventory_client.config import ClientConfig
from inventory_client.exceptions import InventoryClientError
from inventory_client.forms import (
    AddressForm,
    CustomerForm,
    FormController,
    MaterialForm,
    PhoneForm,
    ProductForm,
    SupplierForm,
)
from inventory_client.importer import BulkImporter
from inventory_client.models.enums import Page
from inventory_client.notices import NoticeBoard
from inventory_client.orchestrator import DependencyOrchestrator
from inventory_client.session import Session
from inventory_client.storage import JsonFileStore, KeyValueStore
from inventory_client.store import EntityStores
from inventory_client.uploads import ImageUploader

logger = logging.getLogger(__name__)

SESSION_EXPIRED = "Session expired due to inactivity. Please log in again."


class InventoryApp:
    """One user's view of the inventory backend.

    Parameters
    ----------
    config : ClientConfig, optional
        Defaults to :class:`ClientConfig` defaults.
    storage : KeyValueStore, optional
        Durable key-value store; defaults to a JSON file at
        ``config.storage.path``.
    http : requests.Session, optional
        Transport handed to :class:`RequestClient`.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        storage: KeyValueStore | None = None,
        http: requests.Session | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self.storage = storage if storage is not None else JsonFileStore(self.config.storage.path)
        self.notices = NoticeBoard()
        self.session = Session(self.storage, self.config.session)
        self.client = RequestClient(self.session, self.config.api, http=http)
        self.stores = EntityStores.create(self.client, self.storage)
        self.orchestrator = DependencyOrchestrator(self.session, self.stores, self.notices)

        self.forms: dict[str, FormController] = {
            "addresses": AddressForm(self.stores.addresses, self.notices),
            "customers": CustomerForm(self.stores.customers, self.stores.phones, self.notices),
            "suppliers": SupplierForm(self.stores.suppliers, self.notices),
            "products": ProductForm(self.stores.products, self.notices),
            "materials": MaterialForm(self.stores.materials, self.notices),
            "phones": PhoneForm(self.stores.phones, self.notices),
        }
        self.uploader = ImageUploader(self.client, self.notices)
        self.importer = BulkImporter(
            {name: self.forms[name] for name in ("addresses", "suppliers", "customers")}
        )

    @property
    def page(self) -> Page:
        return self.orchestrator.page

    def is_authenticated(self) -> bool:
        return self.session.is_authenticated()

    def check_activity(self) -> bool:
        """Expire an idle session, otherwise record activity.

        Returns True while the session is still valid.
        """
        if self.session.expire_if_idle():
            self.notices.warning(SESSION_EXPIRED)
            return False
        if self.session.is_authenticated():
            self.session.touch()
        return self.session.is_authenticated()

    async def start(self) -> dict[str, bool]:
        """Load whatever the persisted session allows."""
        self.check_activity()
        return await self.orchestrator.evaluate()

    async def login(self, email: str, password: str) -> bool:
        try:
            token = await self.client.login(email, password)
        except InventoryClientError as exc:
            logger.warning("Login failed: %s", exc)
            self.notices.error(exc.message)
            return False

        self.session.set_token(token)
        self.session.touch()
        self.notices.success("Logged in successfully.")
        await self.orchestrator.evaluate()
        return True

    def logout(self) -> None:
        self.session.set_token(None)
        self.notices.info("Logged out.")

    async def navigate(self, page: Page | str) -> bool:
        self.check_activity()
        return await self.orchestrator.navigate(Page(page))

    def close(self) -> None:
        self.client.close()
