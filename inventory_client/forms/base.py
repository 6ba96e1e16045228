"""Shared submit protocol for entity forms."""

from __future__ import annotations

import logging
from typing import Any, Generic, Protocol, TypeVar

from inventory_client.exceptions import CompositeError, InventoryClientError, ValidationError
from inventory_client.notices import NoticeBoard
from inventory_client.store import Repository

logger = logging.getLogger(__name__)

D = TypeVar("D")
R = TypeVar("R")


class SubmitEvent(Protocol):
    """Anything that can cancel its default action (e.g. a UI submit event)."""

    def prevent_default(self) -> None: ...


class FormController(Generic[D, R]):
    """Draft, submitting flag and error slot for one entity form.

    Subclasses provide :meth:`new_draft` and :meth:`validate`; the latter
    is a pure function of the draft (and the in-memory list, for duplicate
    checks) that returns a record ready to send or raises
    :class:`ValidationError`.
    """

    success_message = "Saved successfully."

    def __init__(self, repository: Repository[R], notices: NoticeBoard) -> None:
        self.repository = repository
        self.notices = notices
        self.draft: D = self.new_draft()
        self.submitting = False
        self.error: str | None = None
        self.last_created: R | None = None

    def new_draft(self) -> D:
        raise NotImplementedError

    def validate(self, draft: D) -> R:
        raise NotImplementedError

    async def after_create(self, created: R, draft: D) -> None:
        """Dependent work once the record exists; raise CompositeError on failure."""

    def reset(self) -> None:
        self.draft = self.new_draft()

    def update(self, **fields: Any) -> D:
        """Set draft fields by name."""
        for name, value in fields.items():
            if not hasattr(self.draft, name):
                raise AttributeError(f"{type(self.draft).__name__} has no field {name!r}")
            setattr(self.draft, name, value)
        return self.draft

    async def submit(self, event: SubmitEvent | None = None) -> bool:
        """Validate the draft and create the record.

        Returns
        -------
        bool
            True once the primary record was created, even if a dependent
            step then failed (see :class:`CompositeError`).
        """
        if event is not None:
            event.prevent_default()
        if self.submitting:
            logger.debug("Ignoring duplicate submit for %s", type(self).__name__)
            return False

        self.submitting = True
        self.error = None

        try:
            record = self.validate(self.draft)
        except ValidationError as exc:
            self.error = exc.message
            self.submitting = False
            return False

        try:
            created = await self.repository.create(record)
        except InventoryClientError as exc:
            logger.warning("%s create failed: %s", self.repository.name, exc)
            self.error = exc.message
            self.submitting = False
            self.notices.error(exc.message)
            return False

        draft = self.draft
        self.last_created = created
        self.reset()
        self.submitting = False
        self.notices.success(self.success_message)

        try:
            await self.after_create(created, draft)
        except CompositeError as exc:
            logger.warning("%s: %s", type(self).__name__, exc.message)
            self.error = exc.message
            self.notices.error(exc.message)
        return True
