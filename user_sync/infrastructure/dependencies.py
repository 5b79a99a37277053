"""FastAPI dependency injection — wires infrastructure to application layer."""

from functools import lru_cache

import httpx

from user_sync.config import Settings, get_settings
from user_sync.application.services import SyncOrchestrator
from user_sync.infrastructure.http import HttpResourceClient, ResourceSource


def build_orchestrator(
    settings: Settings,
    http_client: httpx.AsyncClient | None = None,
) -> SyncOrchestrator:
    """Build a SyncOrchestrator with both resource clients configured from settings."""
    primary = HttpResourceClient(
        base_url=settings.primary_base_url,
        source=ResourceSource.PRIMARY,
        http_client=http_client,
        timeout=settings.request_timeout,
    )
    read_only = HttpResourceClient(
        base_url=settings.read_only_base_url,
        source=ResourceSource.READ_ONLY,
        http_client=http_client,
        timeout=settings.request_timeout,
    )
    return SyncOrchestrator(primary=primary, read_only=read_only)


@lru_cache
def get_http_client() -> httpx.AsyncClient:
    """Shared connection pool for both resource clients."""
    return httpx.AsyncClient(timeout=get_settings().request_timeout)


@lru_cache
def get_orchestrator() -> SyncOrchestrator:
    """Process-wide orchestrator — the single owner of the sync state."""
    return build_orchestrator(get_settings(), http_client=get_http_client())
