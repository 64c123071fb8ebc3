import logging
from typing import Any

import httpx

from roster.errors import ExternalServiceError, NotFoundError, status_to_error_type
from roster.models import EventDraft
from roster.payloads import Acknowledgment, RawEvent, RawUser

logger = logging.getLogger("roster.clients")


async def _request(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    json: Any = None,
) -> Any:
    """Issue one request and decode its JSON body.

    Raises:
        NotFoundError: On a 404 response.
        ExternalServiceError: On any other failure.
    """
    try:
        response = await client.request(method, url, json=json)
    except httpx.HTTPError as e:
        logger.warning("%s %s transport error: %r", method, url, e)
        raise ExternalServiceError(detail=f"{method} {url} failed: {e}", method=method, url=url) from e

    if response.status_code == 404:
        raise NotFoundError(detail=f"{url} not found", method=method, url=url, status_code=404)
    if response.is_error:
        logger.warning("%s %s returned %d", method, url, response.status_code)
        raise ExternalServiceError(
            detail=f"{method} {url} returned {response.status_code}",
            method=method,
            url=url,
            status_code=response.status_code,
            reason=status_to_error_type(response.status_code),
        )

    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as e:
        raise ExternalServiceError(detail=f"{method} {url} returned invalid JSON", method=method, url=url) from e


def _expect_list(data: Any, url: str) -> list[Any]:
    if not isinstance(data, list):
        raise ExternalServiceError(detail=f"{url} did not return a list", url=url)
    return data


def _expect_object(data: Any, url: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ExternalServiceError(detail=f"{url} did not return an object", url=url)
    return data


class HTTPEventStore:
    """Event store client backed by a shared httpx AsyncClient."""

    def __init__(self, client: httpx.AsyncClient, events_path: str = "/events"):
        self._client = client
        self._path = events_path.rstrip("/")

    def _item(self, event_id: str) -> str:
        return f"{self._path}/{event_id}"

    async def list_events(self) -> list[RawEvent]:
        return _expect_list(await _request(self._client, "GET", self._path), self._path)

    async def get_event(self, event_id: str) -> RawEvent:
        url = self._item(event_id)
        return _expect_object(await _request(self._client, "GET", url), url)

    async def create_event(self, draft: EventDraft) -> RawEvent:
        data = await _request(self._client, "POST", self._path, json=draft.to_payload())
        return _expect_object(data, self._path)

    async def update_event(self, event_id: str, draft: EventDraft) -> Acknowledgment:
        return await _request(self._client, "PUT", self._item(event_id), json=draft.to_payload())

    async def delete_event(self, event_id: str) -> Acknowledgment:
        return await _request(self._client, "DELETE", self._item(event_id))


class HTTPUserDirectory:
    """User directory client backed by a shared httpx AsyncClient."""

    def __init__(self, client: httpx.AsyncClient, users_path: str = "/users"):
        self._client = client
        self._path = users_path.rstrip("/")

    async def list_users(self) -> list[RawUser]:
        return _expect_list(await _request(self._client, "GET", self._path), self._path)
