"""Stateful navigation over a Gopher-style item tree.

The Navigator keeps the currently viewed item, a history of visited
requests and a cache of fetched responses. Fetching itself is delegated to
a collaborator (see ``gophermech.protocols.Collaborator``).

Example::

    nav = Navigator(client)
    nav.navigate("gopher.quux.org")
    nav.select_item("Computers")
    nav.select_item(selector="/Software/Gopher")
    nav.select_item(index=10)
    nav.up()
    nav.save_item("menu.txt")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Sequence

from . import matcher
from .cache import ItemCache
from .errors import (
    ItemSaveError,
    NavigationError,
    NoCurrentItemError,
    ProtocolError,
)
from .history import History
from .protocols import Collaborator, ResponseLike
from .types import Item, ItemType, Request

logger = logging.getLogger(__name__)


class Navigator:
    """Browse items through a collaborator, with history and caching."""

    def __init__(self, collaborator: Collaborator, cache: bool = True) -> None:
        self._collaborator = collaborator
        self._cache_enabled = bool(cache)
        self._current: ResponseLike | None = None
        self._history = History()
        self._cache = ItemCache()

    @property
    def collaborator(self) -> Collaborator:
        return self._collaborator

    @collaborator.setter
    def collaborator(self, collaborator: Collaborator) -> None:
        self._collaborator = collaborator

    @property
    def cache_enabled(self) -> bool:
        """Whether cached responses are reused. Responses are stored either way."""
        return self._cache_enabled

    @cache_enabled.setter
    def cache_enabled(self, enabled: bool) -> None:
        self._cache_enabled = bool(enabled)

    @property
    def history(self) -> History:
        return self._history

    @property
    def item_cache(self) -> ItemCache:
        return self._cache

    # -- retrieval ---------------------------------------------------------

    def navigate(self, target: Request | str) -> ResponseLike:
        """Retrieve ``target`` (a Request or gopher URL) and make it current."""
        request = Request.from_url(target) if isinstance(target, str) else target
        response = self._request_item(request)
        self._history.add(request)
        return response

    def select_item(self, *args: Any, **fields: Any) -> ResponseLike:
        """Retrieve an item of the current menu and make it current.

        Takes a display string or regex, a SelectionTemplate, or keyword
        fields (``index``, ``item_type``, ``display``, ``selector``, ``host``,
        ``port``, ``extension``). Inline text lines are never selected.
        """
        template = matcher.template_from_args(*args, **fields)
        item = matcher.select(self.selectable_items(), template)
        logger.debug("Selected %r with %r", item.display, template)
        return self.navigate(item.as_request())

    def selectable_items(self) -> list[Item]:
        """Items of the current menu, excluding inline text."""
        return [
            item for item in self.current_item.items()
            if item.item_type is not ItemType.INLINE_TEXT
        ]

    def up(self) -> ResponseLike:
        """Go back to the previously viewed item."""
        request = self._history.peek_up()
        response = self._request_item(request)
        self._history.move_up()
        return response

    def back(self) -> ResponseLike:
        return self.up()

    def down(self) -> ResponseLike:
        """Go forward again after up()."""
        request = self._history.peek_down()
        response = self._request_item(request)
        self._history.move_down()
        return response

    def forward(self) -> ResponseLike:
        return self.down()

    def reload(self) -> ResponseLike:
        """Fetch the current item again, replacing its cached copy."""
        if self._history.is_empty():
            raise NoCurrentItemError()
        request = self._history.current_request()
        response = self._fetch(request)
        self._cache.store(request.canonical_identity(), response)
        self._current = response
        return response

    def forget(self, identity: str) -> None:
        """Drop one cached response so it is fetched again next time."""
        if self._cache.is_cached(identity):
            logger.debug("Forgetting cached %s", identity)
        self._cache.remove(identity)

    def save_item(self, path: str | Path) -> Path:
        """Write the current item's raw content to ``path``.

        Text and binary items alike are written byte for byte, so a saved
        file always matches ``content()``.
        """
        response = self.current_item
        path = Path(path)
        try:
            path.write_bytes(response.content())
        except OSError as e:
            raise ItemSaveError(f"Couldn't open file ({path}) to save item to: {e}") from e
        logger.info("Saved %s to %s", response.canonical_identity(), path)
        return path

    def _request_item(self, request: Request) -> ResponseLike:
        """Cache-or-fetch resolution shared by all movement methods."""
        identity = request.canonical_identity()
        if self._cache_enabled and self._cache.is_cached(identity):
            logger.debug("Cache hit: %s", identity)
            response = self._cache.retrieve(identity)
        else:
            response = self._fetch(request)
            self._cache.store(identity, response)
        self._current = response
        return response

    def _fetch(self, request: Request) -> ResponseLike:
        identity = request.canonical_identity()
        logger.info("Fetching %s", identity)
        try:
            response = self._collaborator.fetch(request)
        except ProtocolError as e:
            raise NavigationError(str(e), request) from e
        if response.is_error():
            raise NavigationError(response.error or f"Error fetching {identity}", request)
        return response

    # -- current item ------------------------------------------------------

    @property
    def current_item(self) -> ResponseLike:
        if self._current is None:
            raise NoCurrentItemError()
        return self._current

    def has_current_item(self) -> bool:
        return self._current is not None

    @property
    def request(self) -> Request:
        return self.current_item.request

    @property
    def status(self) -> str:
        return self.current_item.status

    @property
    def error(self) -> str | None:
        return self.current_item.error

    def content(self) -> bytes:
        return self.current_item.content()

    def text(self) -> str:
        return self.current_item.text()

    def items(self) -> Sequence[Item]:
        return self.current_item.items()

    def canonical_identity(self) -> str:
        return self.current_item.canonical_identity()

    def is_success(self) -> bool:
        return self.current_item.is_success()

    def is_error(self) -> bool:
        return self.current_item.is_error()

    def is_menu(self) -> bool:
        return self.current_item.is_menu()

    def is_text(self) -> bool:
        return self.current_item.is_text()
