"""Tests for the httpx-backed event store and user directory clients."""

import json

import httpx
import pytest

from roster.clients import HTTPEventStore, HTTPUserDirectory
from roster.errors import ExternalServiceError, NotFoundError
from roster.models import EventDraft


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url="http://backend.test/api", transport=httpx.MockTransport(handler))


class TestHTTPEventStore:
    """Test request shapes and error translation of HTTPEventStore."""

    @pytest.mark.asyncio
    async def test_list_events(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append((request.method, request.url.path))
            return httpx.Response(200, json=[{"_id": "E1", "schedule": "2024-05-01 10:00"}])

        async with _client(handler) as client:
            events = await HTTPEventStore(client, "/events").list_events()

        assert seen == [("GET", "/api/events")]
        assert events == [{"_id": "E1", "schedule": "2024-05-01 10:00"}]

    @pytest.mark.asyncio
    async def test_create_sends_wire_payload(self):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append((request.method, request.url.path, json.loads(request.content)))
            return httpx.Response(201, json={"_id": "E9", "name": "Kickoff"})

        draft = EventDraft(
            name="Kickoff", address="Office", schedule_slot=["2024-05-01 10:00"], participant_ids=["A"]
        )
        async with _client(handler) as client:
            created = await HTTPEventStore(client).create_event(draft)

        assert created == {"_id": "E9", "name": "Kickoff"}
        assert bodies == [
            (
                "POST",
                "/api/events",
                {
                    "name": "Kickoff",
                    "address": "Office",
                    "schedule": ["2024-05-01 10:00"],
                    "participantes": ["A"],
                },
            )
        ]

    @pytest.mark.asyncio
    async def test_update_get_and_delete_paths(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append((request.method, request.url.path))
            if request.method == "GET":
                return httpx.Response(200, json={"_id": "E1"})
            if request.method == "DELETE":
                return httpx.Response(204)
            return httpx.Response(200, json={"message": "updated"})

        draft = EventDraft(name="New", address="Office", schedule_slot=["2024-05-01 10:00"])
        async with _client(handler) as client:
            store = HTTPEventStore(client, "/events/")
            ack = await store.update_event("E1", draft)
            fresh = await store.get_event("E1")
            deleted = await store.delete_event("E1")

        assert seen == [("PUT", "/api/events/E1"), ("GET", "/api/events/E1"), ("DELETE", "/api/events/E1")]
        assert ack == {"message": "updated"}
        assert fresh == {"_id": "E1"}
        assert deleted is None

    @pytest.mark.asyncio
    async def test_not_found(self):
        async with _client(lambda request: httpx.Response(404)) as client:
            with pytest.raises(NotFoundError) as exc_info:
                await HTTPEventStore(client).get_event("missing")
        assert exc_info.value.context["status_code"] == 404

    @pytest.mark.asyncio
    async def test_server_error(self):
        async with _client(lambda request: httpx.Response(500, text="oops")) as client:
            with pytest.raises(ExternalServiceError) as exc_info:
                await HTTPEventStore(client).delete_event("E1")
        assert exc_info.value.context["status_code"] == 500
        assert exc_info.value.context["reason"] == "internal_error"

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(ExternalServiceError):
                await HTTPEventStore(client).list_events()

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        async with _client(lambda request: httpx.Response(200, text="<html>")) as client:
            with pytest.raises(ExternalServiceError):
                await HTTPEventStore(client).list_events()

    @pytest.mark.asyncio
    async def test_unexpected_shape(self):
        async with _client(lambda request: httpx.Response(200, json={"events": []})) as client:
            with pytest.raises(ExternalServiceError):
                await HTTPEventStore(client).list_events()


class TestHTTPUserDirectory:
    """Test HTTPUserDirectory."""

    @pytest.mark.asyncio
    async def test_list_users(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/users"
            return httpx.Response(200, json=[{"_id": "A", "username": "alice"}])

        async with _client(handler) as client:
            users = await HTTPUserDirectory(client, "/users").list_users()

        assert users == [{"_id": "A", "username": "alice"}]
