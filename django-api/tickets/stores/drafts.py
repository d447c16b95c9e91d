"""Draft stores for resumable purchase and registration forms."""

from collections.abc import MutableMapping
from copy import deepcopy
from typing import Any

from tickets.stores.interfaces import DraftStore


class SessionDraftStore(DraftStore):
    """Drafts kept in a per-visitor session (Django's request.session).

    Values must be JSON serializable. Last writer wins.
    """

    def __init__(self, session: MutableMapping[str, Any]) -> None:
        self._session = session

    def get(self, key: str) -> dict[str, Any] | None:
        value = self._session.get(key)
        return deepcopy(value) if isinstance(value, dict) else None

    def set(self, key: str, value: dict[str, Any]) -> None:
        self._session[key] = deepcopy(value)

    def clear(self, key: str) -> None:
        self._session.pop(key, None)


class InMemoryDraftStore(SessionDraftStore):
    """Process-local draft store."""

    def __init__(self) -> None:
        super().__init__({})
