"""Schedule slot codec and event normalization.

Every union shape the backend is allowed to send (bare string vs. list,
id vs. populated user) is resolved here, so the rest of the package only
sees `Event.schedule_slot` as a list of zero or one canonical
"YYYY-MM-DD HH:MM" strings and `Event.participant_ids` as a list of ids.
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from roster.config import get_settings
from roster.errors import ValidationError
from roster.models import Event

PLACEHOLDER = "-"

ISO_SLOT_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2})T(\d{2}:\d{2})(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?$"
)
DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
TIME_RE = re.compile(
    r"^(?:[01]\d|2[0-3]):[0-5]\d(?::[0-5]\d(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?$"
)


def _canonical(slot: str) -> str:
    m = ISO_SLOT_RE.fullmatch(slot)
    if m:
        return f"{m.group(1)} {m.group(2)}"
    return slot


def decode(raw: Any) -> list[str]:
    """Normalize a wire schedule value into a list of 0 or 1 slots."""
    if raw is None:
        return []
    if isinstance(raw, str):
        candidates: Sequence[Any] = [raw]
    elif isinstance(raw, Sequence):
        candidates = raw
    else:
        return []
    for value in candidates:
        if isinstance(value, str) and value:
            return [_canonical(value)]
    return []


def encode(date: str | None, time: str | None) -> str:
    """Combine the form's date and time fields into one slot.

    Raises:
        ValidationError: If either part is missing.
    """
    if not date or not time:
        raise ValidationError(
            detail=get_settings().messages.schedule_incomplete,
            field="schedule",
        )
    return f"{date} {time}"


def split_slot(slot: str | None) -> tuple[str, str]:
    """Split a slot back into its (date, time) display fields."""
    if not slot:
        return "", ""
    canonical = _canonical(slot)
    date, _, time = canonical.partition(" ")
    return date, time


def format_slot(slot: str | None) -> str:
    """Render a slot as "DD-MM-YYYY HH:MM", or "-" when it can't be read."""
    if not slot or not isinstance(slot, str):
        return PLACEHOLDER
    sep = "T" if "T" in slot else " "
    date, _, time = slot.partition(sep)
    m = DATE_RE.match(date)
    if not m or not TIME_RE.fullmatch(time):
        return PLACEHOLDER
    year, month, day = m.groups()
    return f"{day}-{month}-{year} {time[:5]}"


def schedule_text(event: Event) -> str:
    if event.schedule_slot:
        return format_slot(event.schedule_slot[0])
    return PLACEHOLDER


def _participant_id(entry: Any) -> str | None:
    if isinstance(entry, str):
        return entry or None
    if isinstance(entry, Mapping):
        value = entry.get("_id") or entry.get("id")
        return value if isinstance(value, str) and value else None
    return getattr(entry, "id", None)


def normalize_participants(raw: Any) -> list[str]:
    """Reduce a wire participant list to user ids, dropping unusable entries."""
    if isinstance(raw, str) or not isinstance(raw, Sequence):
        return []
    ids: list[str] = []
    for entry in raw:
        pid = _participant_id(entry)
        if pid and pid not in ids:
            ids.append(pid)
    return ids


def embedded_usernames(raw: Any) -> dict[str, str]:
    """Collect the usernames carried by populated participant entries."""
    if isinstance(raw, str) or not isinstance(raw, Sequence):
        return {}
    names: dict[str, str] = {}
    for entry in raw:
        if not isinstance(entry, Mapping):
            continue
        pid = _participant_id(entry)
        username = entry.get("username")
        if pid and isinstance(username, str) and username:
            names.setdefault(pid, username)
    return names


def normalize_event(raw: Mapping[str, Any] | Event) -> Event:
    """Build a canonical Event from whatever the event store returned."""
    if isinstance(raw, Event):
        data: dict[str, Any] = raw.model_dump(by_alias=True)
        usernames = dict(raw.participant_usernames)
    else:
        data = dict(raw)
        usernames = {}
    schedule = data.pop("schedule", None)
    if schedule is None:
        schedule = data.pop("schedule_slot", None)
    participants = data.pop("participantes", None)
    if participants is None:
        participants = data.pop("participant_ids", None)
    for key in ("name", "address"):
        if data.get(key) is None:
            data[key] = ""
    data["schedule"] = decode(schedule)
    data["participantes"] = normalize_participants(participants)
    data["participant_usernames"] = {**embedded_usernames(participants), **usernames}
    return Event.model_validate(data)
