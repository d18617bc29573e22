"""Structural types for the protocol client the navigator drives.

Any object with a matching ``fetch`` can stand in for a real Gopher client,
and any response object with these accessors can be cached and navigated.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from .types import Item, Request


@runtime_checkable
class ResponseLike(Protocol):
    """What the navigator reads from a fetched response."""

    request: Request
    error: str | None

    def canonical_identity(self) -> str: ...
    def content(self) -> bytes: ...
    def text(self) -> str: ...
    def items(self) -> Sequence[Item]: ...
    def is_success(self) -> bool: ...
    def is_error(self) -> bool: ...
    def is_menu(self) -> bool: ...
    def is_text(self) -> bool: ...

    @property
    def status(self) -> str: ...


@runtime_checkable
class Collaborator(Protocol):
    """Fetches requests. Raises ProtocolError on transport or protocol failure."""

    def fetch(self, request: Request) -> ResponseLike: ...
