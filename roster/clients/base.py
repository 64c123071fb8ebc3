from typing import Protocol

from roster.models import EventDraft
from roster.payloads import Acknowledgment, RawEvent, RawUser


class EventStoreClient(Protocol):
    async def list_events(self) -> list[RawEvent]:
        """Return every stored event as sent by the backend (not normalized)."""
        ...

    async def get_event(self, event_id: str) -> RawEvent:
        ...

    async def create_event(self, draft: EventDraft) -> RawEvent:
        """Persist a new event and return the stored entity, id included."""
        ...

    async def update_event(self, event_id: str, draft: EventDraft) -> Acknowledgment:
        ...

    async def delete_event(self, event_id: str) -> Acknowledgment:
        ...


class UserDirectoryClient(Protocol):
    async def list_users(self) -> list[RawUser]:
        ...
