"""Item, request and response value types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote, unquote, urlsplit

DEFAULT_PORT = 70


class ItemType(str, Enum):
    """Gopher item type tags."""

    TEXT_FILE = "0"
    MENU = "1"
    CCSO_NAMESERVER = "2"
    ERROR = "3"
    BINHEX_FILE = "4"
    DOS_BINARY = "5"
    UUENCODED_FILE = "6"
    INDEX_SEARCH = "7"
    TELNET_SESSION = "8"
    BINARY_FILE = "9"
    MIRROR = "+"
    GIF_IMAGE = "g"
    IMAGE = "I"
    TN3270_SESSION = "T"
    INLINE_TEXT = "i"
    HTML = "h"
    SOUND = "s"

    @property
    def is_text(self) -> bool:
        return self in TEXT_TYPES

    def __str__(self) -> str:
        return self.value


TEXT_TYPES = frozenset({ItemType.TEXT_FILE, ItemType.MENU, ItemType.INDEX_SEARCH, ItemType.HTML})


@dataclass(frozen=True)
class Request:
    """Everything needed to (re)fetch one resource."""

    host: str
    port: int = DEFAULT_PORT
    selector: str = ""
    item_type: ItemType = ItemType.MENU
    search: str | None = None

    def canonical_identity(self) -> str:
        """Return the normalized gopher URL used as the cache key."""
        url = f"gopher://{self.host.lower()}:{self.port}/{self.item_type.value}{quote(self.selector, safe='/~.-_')}"
        if self.search:
            url += "%09" + quote(self.search, safe="")
        return url

    def as_url(self) -> str:
        return self.canonical_identity()

    @classmethod
    def from_url(cls, url: str) -> "Request":
        """Build a request from a full or partial gopher URL.

        ``gopher.quux.org``, ``gopher.quux.org:7070/0/about.txt`` and
        ``gopher://gopher.quux.org/1/Software`` are all accepted. An empty
        path addresses the root menu.
        """
        url = url.strip()
        if not url:
            raise ValueError("Empty URL")
        if "://" not in url:
            url = "gopher://" + url

        parts = urlsplit(url)
        if parts.scheme.lower() != "gopher":
            raise ValueError(f"Not a gopher URL: {url}")
        if not parts.hostname:
            raise ValueError(f"No host in URL: {url}")

        try:
            port = parts.port or DEFAULT_PORT
        except ValueError as e:
            raise ValueError(f"Bad port in URL: {url}") from e

        path = parts.path
        # urlsplit treats "?" as a query separator; gopher has no queries
        if parts.query:
            path += "?" + parts.query

        item_type = ItemType.MENU
        selector = ""
        search = None
        if len(path) > 1:
            try:
                item_type = ItemType(path[1])
            except ValueError as e:
                raise ValueError(f"Unknown item type {path[1]!r} in URL: {url}") from e
            selector = unquote(path[2:])
            if "\t" in selector:
                selector, search = selector.split("\t", 1)

        return cls(
            host=parts.hostname,
            port=port,
            selector=selector,
            item_type=item_type,
            search=search or None,
        )


@dataclass(frozen=True)
class Item:
    """One entry of a menu listing."""

    item_type: ItemType
    display: str
    selector: str = ""
    host: str = ""
    port: int = DEFAULT_PORT
    extension: str | None = None

    def as_request(self) -> Request:
        return Request(
            host=self.host,
            port=self.port,
            selector=self.selector,
            item_type=self.item_type,
        )

    def as_menu_line(self) -> str:
        line = f"{self.item_type.value}{self.display}\t{self.selector}\t{self.host}\t{self.port}"
        if self.extension:
            line += f"\t{self.extension}"
        return line


@dataclass(frozen=True)
class Response:
    """The materialized result of fetching a request."""

    request: Request
    body: bytes = b""
    listing: tuple[Item, ...] = ()
    error: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "listing", tuple(self.listing))

    def canonical_identity(self) -> str:
        return self.request.canonical_identity()

    def content(self) -> bytes:
        return self.body

    def text(self) -> str:
        """Content as text; undecodable bytes survive a round trip."""
        return self.body.decode("utf-8", errors="surrogateescape")

    def items(self) -> tuple[Item, ...]:
        return self.listing

    @property
    def status(self) -> str:
        return "-" if self.error else "+"

    def is_success(self) -> bool:
        return self.error is None

    def is_error(self) -> bool:
        return self.error is not None

    def is_menu(self) -> bool:
        return self.request.item_type in (ItemType.MENU, ItemType.INDEX_SEARCH)

    def is_text(self) -> bool:
        return self.request.item_type.is_text
