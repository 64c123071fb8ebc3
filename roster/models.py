from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from roster.payloads import EventPayload


class User(BaseModel):
    """Directory entry offered as a participant."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="_id",
    )
    username: str = ""

    @field_validator("username", mode="before")
    @classmethod
    def null_username(cls, v):
        return "" if v is None else v


class Event(BaseModel):
    """Canonical, normalized event.

    `schedule_slot` holds zero or one "YYYY-MM-DD HH:MM" strings. Build
    instances from wire data with `roster.schedule.normalize_event`.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="_id",
    )
    name: str = ""
    address: str = ""
    schedule_slot: list[str] = Field(
        default_factory=list,
        max_length=1,
        validation_alias=AliasChoices("schedule", "schedule_slot"),
        serialization_alias="schedule",
    )
    participant_ids: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("participantes", "participant_ids"),
        serialization_alias="participantes",
    )
    # Usernames embedded in populated participant entries, keyed by id.
    participant_usernames: dict[str, str] = Field(default_factory=dict, exclude=True)


class EventDraft(BaseModel):
    """Outgoing create/update body."""

    name: str
    address: str
    schedule_slot: list[str] = Field(default_factory=list, max_length=1)
    participant_ids: list[str] = Field(default_factory=list)

    def to_payload(self) -> EventPayload:
        return {
            "name": self.name,
            "address": self.address,
            "schedule": list(self.schedule_slot),
            "participantes": list(self.participant_ids),
        }
