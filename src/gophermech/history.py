"""Visited-request history with back/forward movement."""

from __future__ import annotations

from .errors import HistoryBoundaryError
from .types import Request


class History:
    """Ordered list of visited requests plus a cursor.

    Adding a request after moving up discards everything after the cursor,
    the way a web browser drops its forward list.
    """

    def __init__(self) -> None:
        self._entries: list[Request] = []
        self._cursor: int | None = None

    @property
    def entries(self) -> tuple[Request, ...]:
        return tuple(self._entries)

    @property
    def cursor(self) -> int | None:
        return self._cursor

    def add(self, request: Request) -> None:
        """Make ``request`` the current entry, dropping any forward entries."""
        if self._cursor is not None:
            del self._entries[self._cursor + 1 :]
        self._entries.append(request)
        self._cursor = len(self._entries) - 1

    def current_request(self) -> Request:
        if self._cursor is None:
            raise HistoryBoundaryError("No item has been visited yet.")
        return self._entries[self._cursor]

    def peek_up(self) -> Request:
        """Return the entry above the cursor without moving."""
        if not self._cursor:
            raise HistoryBoundaryError(
                "Can't go up any further; you've reached the top of the item tree."
            )
        return self._entries[self._cursor - 1]

    def peek_down(self) -> Request:
        """Return the entry below the cursor without moving."""
        if self._cursor is None or self._cursor + 1 >= len(self._entries):
            raise HistoryBoundaryError(
                "Can't go down any further; you've reached the bottom of the item tree."
            )
        return self._entries[self._cursor + 1]

    def move_up(self) -> Request:
        request = self.peek_up()
        self._cursor -= 1
        return request

    def move_down(self) -> Request:
        request = self.peek_down()
        self._cursor += 1
        return request

    def clear(self) -> None:
        self._entries.clear()
        self._cursor = None

    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)
