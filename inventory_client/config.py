"""Configuration management for inventory-client."""

from dataclasses import dataclass, field
from pathlib import Path

from inventory_client.exceptions import ConfigurationError

DEFAULT_API_BASE = "https://projeto-vitoriacestas-backend.vercel.app/api"
PRODUCTION_HOST_SUFFIX = "vercel.app"


@dataclass
class ApiConfig:
    """Backend address configuration.

    The base address is resolved once, in this order: explicit override,
    build-time configured value, same-origin ``/api`` when hosted on the
    production domain, then the fallback absolute URL.
    """

    override: str | None = None
    configured: str | None = None
    host_origin: str | None = None
    fallback: str = DEFAULT_API_BASE
    timeout: float = 15.0

    def resolve_base_url(self) -> str:
        """Return the base URL every request path is appended to."""
        if self.override:
            return self.override.rstrip("/")
        if self.configured:
            return self.configured.rstrip("/")
        if self.host_origin and PRODUCTION_HOST_SUFFIX in self.host_origin:
            return f"{self.host_origin.rstrip('/')}/api"
        return self.fallback.rstrip("/")


@dataclass
class StorageConfig:
    """Durable key-value storage configuration."""

    path: Path = field(default_factory=lambda: Path.home() / ".inventory_client" / "storage.json")


@dataclass
class SessionConfig:
    """Session token configuration."""

    token_key: str = "vitoriacestas_token"
    activity_key: str = "vc_last_activity"
    inactivity_limit_seconds: float = 20 * 60


@dataclass
class DisplayConfig:
    """Console display configuration."""

    recent: int = 10


@dataclass
class ClientConfig:
    """Main configuration for inventory-client."""

    api: ApiConfig = field(default_factory=ApiConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create config from environment variables."""
        import os

        try:
            api = ApiConfig(
                override=os.getenv("INVENTORY_API_BASE") or None,
                configured=os.getenv("VITE_API_BASE") or None,
                host_origin=os.getenv("INVENTORY_HOST") or None,
                timeout=float(os.getenv("INVENTORY_TIMEOUT", "15")),
            )
            session = SessionConfig(
                inactivity_limit_seconds=float(os.getenv("INVENTORY_INACTIVITY_MINUTES", "20")) * 60,
            )
            display = DisplayConfig(recent=int(os.getenv("INVENTORY_RECENT", "10")))
        except ValueError as exc:
            raise ConfigurationError(f"Invalid numeric setting: {exc}") from exc

        storage_path = os.getenv("INVENTORY_STORAGE")
        storage = StorageConfig(path=Path(storage_path)) if storage_path else StorageConfig()

        return cls(
            api=api,
            storage=storage,
            session=session,
            display=display,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
