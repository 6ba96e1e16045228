"""Authenticated request pipeline for the inventory backend.

This is the only I/O boundary of the client. Every call:

1. merges headers (JSON content type unless the body is multipart),
2. attaches the session's bearer token when there is one,
3. reads the whole body as text, then tries to parse it as JSON,
4. raises :class:`RequestError` on transport failures or failure statuses,
5. returns an :class:`Envelope` otherwise.

Calls are never queued or coalesced. The blocking ``requests`` call runs
in a worker thread through :func:`asyncio.to_thread`; only the awaiting
task is suspended and all state mutation stays on the event loop.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any

import requests

from inventory_client.config import ApiConfig
from inventory_client.exceptions import ErrorKind, RequestError
from inventory_client.session import Session

logger = logging.getLogger(__name__)

UNEXPECTED_RESPONSE = "Unexpected server response. Please try again."
GENERIC_FAILURE = "Could not process the request."
TOKEN_MISSING = "Token not returned by the API."


@dataclass
class MultipartPayload:
    """Binary form payload carrying a single file field."""

    field: str
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass
class Envelope:
    """The ``{data, message?}`` shape every backend response follows."""

    data: Any
    message: str | None = None


class RequestClient:
    """Send requests to the backend on behalf of the current session."""

    def __init__(
        self,
        session: Session,
        config: ApiConfig | None = None,
        http: requests.Session | None = None,
    ) -> None:
        """Initialize the request client.

        Parameters
        ----------
        session : Session
            Source of the bearer token; read on every call.
        config : ApiConfig | None
            Backend address configuration. The base URL is resolved once
            here, never per call.
        http : requests.Session | None
            Underlying HTTP session (a new one when omitted).
        """
        self.config = config or ApiConfig()
        self.base_url = self.config.resolve_base_url()
        self.session = session
        self.http = http or requests.Session()

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Envelope:
        """Issue one call and return its envelope.

        Raises
        ------
        RequestError
            ``TRANSPORT`` when the backend is unreachable or a success
            response is unparsable; ``STATUS`` on failure statuses.
        """
        merged = self._build_headers(body, headers)
        return await asyncio.to_thread(self._send, path, method.upper(), body, merged)

    async def login(self, email: str, password: str) -> str:
        """Exchange credentials for an access token."""
        envelope = await self.request(
            "/auth/login", "POST", {"email": email, "password": password}
        )
        data = envelope.data if isinstance(envelope.data, dict) else {}
        token = data.get("accessToken") or data.get("token")
        if not token:
            raise RequestError(TOKEN_MISSING, kind=ErrorKind.STATUS)
        return str(token)

    async def upload(self, payload: MultipartPayload) -> str:
        """Upload a file and return the stored URL or path."""
        envelope = await self.request("/upload", "POST", payload)
        data = envelope.data if isinstance(envelope.data, dict) else {}
        location = data.get("url") or data.get("path")
        if not location:
            raise RequestError("Upload did not return a file location.", kind=ErrorKind.STATUS)
        return str(location)

    def close(self) -> None:
        self.http.close()

    def _build_headers(self, body: Any, headers: dict[str, str] | None) -> dict[str, str]:
        merged = dict(headers or {})
        if not isinstance(body, MultipartPayload):
            if not any(key.lower() == "content-type" for key in merged):
                merged["Content-Type"] = "application/json"
        token = self.session.token
        if token:
            merged["Authorization"] = f"Bearer {token}"
        return merged

    def _send(self, path: str, method: str, body: Any, headers: dict[str, str]) -> Envelope:
        url = f"{self.base_url}{path}"
        kwargs: dict[str, Any] = {}
        if isinstance(body, MultipartPayload):
            kwargs["files"] = {body.field: (body.filename, body.content, body.content_type)}
        elif body is not None:
            kwargs["data"] = json.dumps(body, ensure_ascii=False, default=str).encode("utf-8")

        logger.debug("%s %s", method, path)
        try:
            response = self.http.request(
                method, url, headers=headers, timeout=self.config.timeout, **kwargs
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise RequestError(UNEXPECTED_RESPONSE, kind=ErrorKind.TRANSPORT) from exc

        text = response.text or ""
        payload, parsed = self._parse(text)
        logger.debug(
            "%s %s -> %d",
            method,
            path,
            response.status_code,
            extra={"extra": {"method": method, "path": path, "status": response.status_code}},
        )

        if not response.ok:
            raise RequestError(
                self._failure_message(payload, path),
                kind=ErrorKind.STATUS,
                status=response.status_code,
            )
        if not parsed:
            logger.warning("%s %s returned a non-JSON body", method, path)
            raise RequestError(UNEXPECTED_RESPONSE, kind=ErrorKind.TRANSPORT, status=response.status_code)

        return self._envelope(payload)

    @staticmethod
    def _parse(text: str) -> tuple[Any, bool]:
        """Parse a body, synthesizing ``{"message": text}`` when it is not JSON."""
        if not text.strip():
            return {}, True
        try:
            return json.loads(text), True
        except ValueError:
            return {"message": text}, False

    @staticmethod
    def _failure_message(payload: Any, path: str) -> str:
        if isinstance(payload, str):
            raw = payload
        elif isinstance(payload, dict):
            raw = payload.get("message") or payload.get("error")
        else:
            raw = None
        if raw and not isinstance(raw, str):
            raw = str(raw)
        if not raw:
            return GENERIC_FAILURE
        lowered = raw.lstrip().lower()
        if lowered.startswith("<!doctype") or lowered.startswith("<html"):
            return (
                f"Endpoint {path} is unavailable right now. "
                "Check that the backend exposes this resource."
            )
        return raw

    @staticmethod
    def _envelope(payload: Any) -> Envelope:
        if isinstance(payload, dict):
            message = payload.get("message")
            message = str(message) if message is not None else None
            if "data" in payload:
                return Envelope(data=payload["data"], message=message)
            return Envelope(data=payload, message=message)
        return Envelope(data=payload)
