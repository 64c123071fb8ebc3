from collections.abc import Iterable

from roster.models import User


def _sort_key(user: User) -> tuple[str, str]:
    return (user.username.casefold(), user.id or "")


class ParticipantPartition:
    """Splits the known roster into available and selected users.

    `available` and `selected` are always disjoint and together hold
    every user in the roster. Identity is the user id.
    """

    def __init__(self, roster: Iterable[User] = (), selected_ids: Iterable[str] = ()) -> None:
        self._roster: list[User] = []
        self._available: list[User] = []
        self._selected: list[User] = []
        self.reset(roster, selected_ids)

    def reset(self, roster: Iterable[User], selected_ids: Iterable[str] = ()) -> None:
        wanted = set(selected_ids)
        self._roster = list(roster)
        self._selected = [u for u in self._roster if u.id and u.id in wanted]
        self._available = [u for u in self._roster if not (u.id and u.id in wanted)]

    @property
    def roster(self) -> tuple[User, ...]:
        return tuple(self._roster)

    @property
    def available(self) -> tuple[User, ...]:
        return tuple(self._available)

    @property
    def selected(self) -> tuple[User, ...]:
        return tuple(self._selected)

    def _index(self, users: list[User], user_id: str) -> int | None:
        for i, u in enumerate(users):
            if u.id == user_id:
                return i
        return None

    def add(self, user: User) -> bool:
        """Move a user from available to selected. Returns True if moved."""
        if user is None or not user.id:
            return False
        idx = self._index(self._available, user.id)
        if idx is None:
            return False
        self._selected.append(self._available.pop(idx))
        return True

    def remove(self, user: User) -> bool:
        """Move a user back to available, keeping it sorted by username."""
        if user is None or not user.id:
            return False
        idx = self._index(self._selected, user.id)
        if idx is None:
            return False
        self._available.append(self._selected.pop(idx))
        self._available.sort(key=_sort_key)
        return True

    def derived_ids(self) -> list[str]:
        return [u.id for u in self._selected if u.id]
