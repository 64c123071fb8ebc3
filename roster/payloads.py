from typing import Any, Optional, TypedDict, Union


class RawUser(TypedDict, total=False):
    _id: str
    id: str
    username: str
    gmail: str
    birthday: str


# The backend sends `schedule` as a bare string, a list, or nothing at all,
# and `participantes` either as ids or as populated user documents.
RawSchedule = Union[str, list[str], None]
RawParticipant = Union[str, RawUser]


class RawEvent(TypedDict, total=False):
    _id: str
    id: str
    name: str
    address: str
    schedule: RawSchedule
    participantes: Optional[list[RawParticipant]]


class EventPayload(TypedDict):
    name: str
    address: str
    schedule: list[str]
    participantes: list[str]


# Update/delete acknowledgments are not interpreted.
Acknowledgment = Any
