"""Exceptions raised by the navigator and its collaborators."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .types import Request


class GopherMechError(Exception):
    """Base class for all gophermech errors."""


class ProtocolError(GopherMechError):
    """Raised by a collaborator when a request cannot be fetched."""


class NavigationError(GopherMechError):
    """A fetch failed while resolving a request.

    The collaborator's message is kept unchanged; the original exception,
    if any, is available as ``__cause__``.
    """

    def __init__(self, message: str, request: Request | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.request = request


class HistoryBoundaryError(GopherMechError):
    """Moved past the top or bottom of the visited sequence."""


class NoCurrentItemError(GopherMechError):
    """An accessor was used before any item was retrieved."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "Too early to call this method: you haven't requested any item yet."
        )


class NoMatchError(GopherMechError):
    """No item in the current listing matched the selection template."""

    def __init__(self, template: Any) -> None:
        super().__init__(f"No item matched {template!r}")
        self.template = template


class ItemSaveError(GopherMechError, OSError):
    """The current item could not be written to disk."""
