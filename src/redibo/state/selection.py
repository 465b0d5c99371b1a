"""Single "currently detailed" record, tracked by id."""

from typing import Iterable, Optional, Protocol, TypeVar


class HasId(Protocol):
    id: int


R = TypeVar("R", bound=HasId)


class SelectionState:
    """Holds at most one selected id.

    The id is resolved against whatever collection is live at read time, so
    a record that disappeared on refetch simply reads as "no selection".
    Filtering, sorting and paging never touch this state.
    """

    def __init__(self) -> None:
        self._selected_id: Optional[int] = None

    @property
    def selected_id(self) -> Optional[int]:
        return self._selected_id

    def select(self, record_id: int) -> None:
        self._selected_id = record_id

    def clear(self) -> None:
        self._selected_id = None

    def current(self, collection: Iterable[R]) -> Optional[R]:
        if self._selected_id is None:
            return None
        for record in collection:
            if record.id == self._selected_id:
                return record
        return None

    def prune(self, collection: Iterable[R]) -> None:
        """Drop the selection if its record is not in ``collection``."""
        if self._selected_id is not None and self.current(collection) is None:
            self._selected_id = None
