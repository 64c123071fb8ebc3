"""Resource lifecycle for a roster session.

This module builds the shared httpx client and the collaborator clients
from settings, and tears them down again. `roster_session()` bundles
both steps around a loaded controller:

    async with roster_session() as controller:
        controller.start_create()
        ...
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx

from roster.client_debug import wrap_client
from roster.clients import EventStoreClient, HTTPEventStore, HTTPUserDirectory, UserDirectoryClient
from roster.config import get_settings
from roster.controller import EventRosterController
from roster.http_logging import HTTPLogHooks

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


def configure_logging() -> None:
    """Apply the standard log format and the configured level."""
    settings = get_settings()
    logging.basicConfig(level=settings.log.level, format=LOG_FORMAT)
    if settings.debug.http:
        logging.getLogger("roster.http").setLevel(logging.DEBUG)
    if settings.debug.clients:
        logging.getLogger("roster.clients").setLevel(logging.DEBUG)


@dataclass
class RosterResources:
    """Container for resources initialized for a session."""

    http_client: httpx.AsyncClient | None = None
    event_store: EventStoreClient | None = None
    user_directory: UserDirectoryClient | None = None


def init_http_client() -> httpx.AsyncClient:
    """Create the shared httpx client.

    Returns:
        AsyncClient bound to the configured base URL.
    """
    settings = get_settings()
    headers = {"Accept": "application/json"}
    if settings.api.token:
        headers["Authorization"] = f"Bearer {settings.api.token}"

    event_hooks = HTTPLogHooks().as_event_hooks() if settings.debug.http else None
    return httpx.AsyncClient(
        base_url=settings.api.base_url,
        timeout=settings.api.timeout_sec,
        headers=headers,
        event_hooks=event_hooks,
    )


async def setup_resources() -> RosterResources:
    """Set up the HTTP client and both collaborator clients.

    Returns:
        RosterResources containing all initialized resources.
    """
    settings = get_settings()
    resources = RosterResources()
    resources.http_client = init_http_client()

    store = HTTPEventStore(resources.http_client, settings.api.events_path)
    directory = HTTPUserDirectory(resources.http_client, settings.api.users_path)
    if settings.debug.clients:
        client_logger = logging.getLogger("roster.clients")
        store = wrap_client(store, client_logger, "event_store")
        directory = wrap_client(directory, client_logger, "user_directory")

    resources.event_store = store
    resources.user_directory = directory
    logger.info("Roster clients ready (base_url=%s)", settings.api.base_url)
    return resources


async def cleanup_resources(resources: RosterResources) -> None:
    """Close everything opened by setup_resources.

    Args:
        resources: The resources to clean up.
    """
    if resources.http_client is not None:
        await resources.http_client.aclose()
    resources.http_client = None
    resources.event_store = None
    resources.user_directory = None


@asynccontextmanager
async def roster_session() -> AsyncIterator[EventRosterController]:
    """Yield a controller with users and events already loaded."""
    configure_logging()
    resources = await setup_resources()
    try:
        controller = EventRosterController(resources.event_store, resources.user_directory)
        await controller.load()
        yield controller
    finally:
        await cleanup_resources(resources)
