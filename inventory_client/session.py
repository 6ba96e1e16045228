"""Authentication session: the single owner of the bearer token."""

import logging
import time
from typing import Callable

from inventory_client.config import SessionConfig
from inventory_client.storage import KeyValueStore

logger = logging.getLogger(__name__)

AuthListener = Callable[[bool], None]


class Session:
    """Hold the current token and persist it under a fixed storage key.

    Readers never cache the token; they call :meth:`is_authenticated` or
    read :attr:`token`, or subscribe to be told when the authenticated
    state flips. Notification is synchronous, inside :meth:`set_token`.
    """

    def __init__(self, storage: KeyValueStore, config: SessionConfig | None = None) -> None:
        self.config = config or SessionConfig()
        self._storage = storage
        self._token: str | None = storage.get(self.config.token_key) or None
        self._listeners: list[AuthListener] = []

    @property
    def token(self) -> str | None:
        return self._token

    def is_authenticated(self) -> bool:
        return bool(self._token)

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Register a listener for authenticated-state changes.

        Returns a callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_token(self, value: str | None) -> None:
        """Persist and hold ``value``, or clear both when it is empty."""
        was_authenticated = self.is_authenticated()
        if value:
            self._token = value
            self._storage.set(self.config.token_key, value)
        else:
            self._token = None
            self._storage.remove(self.config.token_key)

        authenticated = self.is_authenticated()
        if authenticated != was_authenticated:
            logger.info("Session %s", "authenticated" if authenticated else "cleared")
            for listener in list(self._listeners):
                listener(authenticated)

    def touch(self, now: float | None = None) -> None:
        """Record user activity for the inactivity timeout."""
        stamp = time.time() if now is None else now
        self._storage.set(self.config.activity_key, str(stamp))

    def expire_if_idle(self, now: float | None = None) -> bool:
        """Clear the token when idle longer than the configured limit.

        Returns
        -------
        bool
            True if the session was expired by this call.
        """
        if not self.is_authenticated():
            return False
        current = time.time() if now is None else now
        raw = self._storage.get(self.config.activity_key)
        try:
            last = float(raw) if raw else None
        except ValueError:
            last = None
        if last is None:
            self.touch(current)
            return False
        if current - last <= self.config.inactivity_limit_seconds:
            return False
        logger.info("Session expired after %.0fs of inactivity", current - last)
        self.set_token(None)
        return True
