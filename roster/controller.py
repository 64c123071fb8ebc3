"""Event roster controller.

Owns the local event/user cache, the active form and the display state,
and drives the list/create/edit/delete workflows against the event store
and user directory clients. All mutation happens on the event loop that
awaits the controller's coroutines; there is no locking.
"""

import logging
from dataclasses import dataclass, field
from typing import Literal, Union

from roster import schedule
from roster.clients.base import EventStoreClient, UserDirectoryClient
from roster.config import MessageSettings, get_settings
from roster.errors import RemoteError, RosterError, SilentLoadError, ValidationError
from roster.models import Event, EventDraft, User
from roster.partition import ParticipantPartition

logger = logging.getLogger("roster.controller")

Section = Literal["create", "edit", "list"]


@dataclass
class EventForm:
    """Editable fields of the event being created or edited."""

    name: str = ""
    address: str = ""
    date: str = ""
    time: str = ""
    schedule_slot: list[str] = field(default_factory=list)
    partition: ParticipantPartition = field(default_factory=ParticipantPartition)

    @classmethod
    def blank(cls, users: list[User]) -> "EventForm":
        return cls(partition=ParticipantPartition(users))

    @classmethod
    def from_event(cls, event: Event, users: list[User]) -> "EventForm":
        slot = list(event.schedule_slot[:1])
        date, time = schedule.split_slot(slot[0] if slot else None)
        return cls(
            name=event.name,
            address=event.address,
            date=date,
            time=time,
            schedule_slot=slot,
            partition=ParticipantPartition(users, event.participant_ids),
        )

    def validate(self, messages: MessageSettings) -> None:
        """Check required fields in display order.

        Raises:
            ValidationError: For the first missing field.
        """
        if not self.name.strip():
            raise ValidationError(detail=messages.name_required, field="name")
        if not self.schedule_slot:
            raise ValidationError(detail=messages.schedule_required, field="schedule")
        if not self.address.strip():
            raise ValidationError(detail=messages.address_required, field="address")

    def to_draft(self) -> EventDraft:
        return EventDraft(
            name=self.name.strip(),
            address=self.address.strip(),
            schedule_slot=list(self.schedule_slot[:1]),
            participant_ids=self.partition.derived_ids(),
        )


@dataclass(frozen=True)
class Listing:
    pass


@dataclass(frozen=True)
class Creating:
    form: EventForm


@dataclass(frozen=True)
class Editing:
    event_id: str
    form: EventForm


Mode = Union[Listing, Creating, Editing]


class EventRosterController:
    def __init__(
        self,
        store: EventStoreClient,
        directory: UserDirectoryClient,
        messages: MessageSettings | None = None,
    ) -> None:
        self._store = store
        self._directory = directory
        self._messages = messages or get_settings().messages
        self._submitting = False
        self._deleting = False

        self.events: list[Event] = []
        self.users: list[User] = []
        self.mode: Mode = Listing()
        self.pending_delete: int | None = None
        self.open_section: Section | None = "list"
        self.error: RosterError | None = None
        # Diagnostics only, never shown to the operator.
        self.last_load_error: SilentLoadError | None = None

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def form(self) -> EventForm | None:
        if isinstance(self.mode, (Creating, Editing)):
            return self.mode.form
        return None

    @property
    def editing_id(self) -> str | None:
        return self.mode.event_id if isinstance(self.mode, Editing) else None

    @property
    def in_flight(self) -> bool:
        return self._submitting or self._deleting

    @property
    def error_message(self) -> str:
        return self.error.detail if self.error is not None else ""

    @property
    def error_field(self) -> str | None:
        return self.error.field if self.error is not None else None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """Load users, then events (participant names need the users)."""
        await self.load_users()
        await self.load_events()

    async def load_users(self) -> None:
        try:
            raw = await self._directory.list_users()
        except Exception as e:
            logger.warning("Failed to load users: %r", e)
            self.last_load_error = SilentLoadError(detail="Failed to load users", source="users")
            return
        users = []
        for entry in raw or ():
            try:
                users.append(User.model_validate(entry))
            except Exception as e:
                logger.warning("Skipping unreadable user %r: %r", entry, e)
        self.users = users
        logger.info("Loaded %d users", len(users))

        form = self.form
        if form is not None:
            form.partition.reset(self.users, form.partition.derived_ids())

    async def load_events(self) -> None:
        try:
            raw = await self._store.list_events()
        except Exception as e:
            logger.warning("Failed to load events: %r", e)
            self.last_load_error = SilentLoadError(detail="Failed to load events", source="events")
            return
        events = []
        for entry in raw or ():
            try:
                events.append(schedule.normalize_event(entry))
            except Exception as e:
                logger.warning("Skipping unreadable event %r: %r", entry, e)
        self.events = events
        logger.info("Loaded %d events", len(events))

    # ------------------------------------------------------------------
    # Form transitions
    # ------------------------------------------------------------------

    def start_create(self) -> EventForm:
        form = EventForm.blank(self.users)
        self.mode = Creating(form=form)
        self.error = None
        self.open_section = "create"
        return form

    def start_edit(self, event: Event) -> EventForm | None:
        if not event.id:
            self.error = ValidationError(detail=self._messages.no_event_selected)
            return None
        form = EventForm.from_event(event, self.users)
        self.mode = Editing(event_id=event.id, form=form)
        self.error = None
        self.open_section = "edit"
        return form

    def cancel(self) -> None:
        self.mode = Listing()
        self.error = None
        self.open_section = "list"

    def set_schedule(self, date: str | None = None, time: str | None = None) -> bool:
        """Encode the form's date and time into its single schedule slot."""
        form = self.form
        if form is None:
            return False
        if date is not None:
            form.date = date
        if time is not None:
            form.time = time
        self.error = None
        try:
            slot = schedule.encode(form.date, form.time)
        except ValidationError as e:
            self.error = e
            return False
        form.schedule_slot = [slot]
        return True

    def clear_schedule(self) -> None:
        form = self.form
        if form is None:
            return
        form.schedule_slot = []
        form.date = ""
        form.time = ""

    def add_participant(self, user: User) -> bool:
        form = self.form
        return form.partition.add(user) if form is not None else False

    def remove_participant(self, user: User) -> bool:
        form = self.form
        return form.partition.remove(user) if form is not None else False

    # ------------------------------------------------------------------
    # Remote workflows
    # ------------------------------------------------------------------

    async def submit(self) -> bool:
        """Validate the active form and create or update the event.

        Returns True once the whole workflow completed and the controller
        is back to listing; False on validation or remote failure, with
        `error` set.
        """
        mode = self.mode
        if isinstance(mode, Listing):
            self.error = ValidationError(detail=self._messages.no_event_selected)
            return False
        if self._submitting:
            logger.warning("Ignoring submit while a previous submit is in flight")
            return False

        self.error = None
        try:
            mode.form.validate(self._messages)
        except ValidationError as e:
            self.error = e
            return False

        draft = mode.form.to_draft()
        self._submitting = True
        try:
            if isinstance(mode, Creating):
                return await self._create(mode, draft)
            return await self._update(mode, draft)
        finally:
            self._submitting = False

    async def _create(self, mode: Creating, draft: EventDraft) -> bool:
        logger.info("Creating event name=%s participants=%d", draft.name, len(draft.participant_ids))
        try:
            created = await self._store.create_event(draft)
            event = schedule.normalize_event(created)
        except Exception:
            logger.exception("Failed to create event")
            self.error = RemoteError(detail=self._messages.create_failed, operation="create")
            return False

        self.events.append(event)
        logger.info("Created event id=%s", event.id)
        self._finish(mode)
        return True

    async def _update(self, mode: Editing, draft: EventDraft) -> bool:
        event_id = mode.event_id
        logger.info("Updating event id=%s", event_id)
        try:
            await self._store.update_event(event_id, draft)
        except Exception:
            logger.exception("Failed to update event %s", event_id)
            self.error = RemoteError(
                detail=self._messages.update_failed, operation="update", event_id=event_id
            )
            return False

        # Refetch only after the update is acknowledged.
        try:
            fresh = schedule.normalize_event(await self._store.get_event(event_id))
        except Exception:
            logger.exception("Failed to reload event %s", event_id)
            self.error = SilentLoadError(
                detail=self._messages.reload_failed, operation="reload", event_id=event_id
            )
            return False

        for i, existing in enumerate(self.events):
            if existing.id == event_id:
                self.events[i] = fresh
                break
        else:
            logger.warning("Updated event %s is no longer in the local list", event_id)

        await self.load_users()
        self._finish(mode)
        return True

    def _finish(self, mode: Mode) -> None:
        # A late completion must not clobber a form the operator opened since.
        if self.mode is not mode:
            return
        self.mode = Listing()
        self.error = None
        self.open_section = "list"

    def request_delete(self, index: int) -> None:
        self.pending_delete = index

    def cancel_delete(self) -> None:
        self.pending_delete = None

    async def confirm_delete(self) -> bool:
        idx = self.pending_delete
        if idx is None:
            return False
        if self._deleting:
            logger.warning("Ignoring delete while a previous delete is in flight")
            return False

        event = self.events[idx] if 0 <= idx < len(self.events) else None
        if event is None or not event.id:
            self.pending_delete = None
            return False

        self._deleting = True
        try:
            await self._store.delete_event(event.id)
        except Exception:
            logger.exception("Failed to delete event %s", event.id)
            self.error = RemoteError(
                detail=self._messages.delete_failed, operation="delete", event_id=event.id
            )
            return False
        finally:
            self._deleting = False
            self.pending_delete = None

        # The list may have been reloaded while the call was pending.
        index = next((i for i, e in enumerate(self.events) if e is event), None)
        if index is None:
            index = next((i for i, e in enumerate(self.events) if e.id == event.id), None)
        if index is None:
            logger.warning("Deleted event %s is no longer in the local list", event.id)
        else:
            del self.events[index]
        logger.info("Deleted event id=%s", event.id)
        return True

    # ------------------------------------------------------------------
    # Display helpers
    # ------------------------------------------------------------------

    def toggle_section(self, section: Section) -> None:
        self.open_section = None if self.open_section == section else section

    def schedule_text(self, event: Event) -> str:
        return schedule.schedule_text(event)

    def event_address(self, event: Event) -> str:
        return event.address or schedule.PLACEHOLDER

    def participant_names(self, event: Event) -> str:
        by_id = {**event.participant_usernames}
        by_id.update((u.id, u.username) for u in self.users if u.id and u.username)
        names = [by_id[pid] for pid in event.participant_ids if by_id.get(pid)]
        return ", ".join(names) if names else schedule.PLACEHOLDER
