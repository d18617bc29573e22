"""Shared fixtures for gophermech tests."""

import pytest

from gophermech.errors import ProtocolError
from gophermech.navigator import Navigator
from gophermech.types import Item, ItemType, Request, Response

HOST = "example.org"


class CountingCollaborator:
    """Serves canned pages keyed by canonical identity and records every fetch.

    A page is either ``(body, items)`` or an error message string. Every
    fetch builds a fresh Response object.
    """

    def __init__(self, pages: dict) -> None:
        self.pages = pages
        self.fetches: list[Request] = []

    def fetch(self, request: Request) -> Response:
        self.fetches.append(request)
        page = self.pages.get(request.canonical_identity())
        if page is None:
            raise ProtocolError(f"Not found: {request.selector}")
        if isinstance(page, str):
            return Response(request, error=page)
        body, items = page
        return Response(request, body=body, listing=items)

    def fetch_count(self, request: Request | None = None) -> int:
        if request is None:
            return len(self.fetches)
        key = request.canonical_identity()
        return sum(1 for r in self.fetches if r.canonical_identity() == key)


def menu_item(display: str, selector: str, item_type: ItemType = ItemType.MENU) -> Item:
    return Item(item_type, display, selector, HOST, 70)


@pytest.fixture
def root_request():
    return Request(HOST)


@pytest.fixture
def pages():
    """A small Gopherspace: root -> Computers -> Software, plus files."""
    root_items = [
        Item(ItemType.INLINE_TEXT, "Welcome to example.org", "", HOST, 70),
        menu_item("Computers", "/Computers"),
        menu_item("About", "/about.txt", ItemType.TEXT_FILE),
        menu_item("Cat picture", "/cat.gif", ItemType.GIF_IMAGE),
        menu_item("Broken", "/broken"),
    ]
    computers_items = [
        menu_item("Software", "/Computers/Software"),
        menu_item("Hardware", "/Computers/Hardware"),
    ]
    software_items = [
        menu_item("Gopher clients", "/Computers/Software/clients.txt", ItemType.TEXT_FILE),
    ]

    def key(selector: str, item_type: ItemType = ItemType.MENU) -> str:
        return Request(HOST, 70, selector, item_type).canonical_identity()

    return {
        key(""): (b"root menu", root_items),
        key("/Computers"): (b"computers menu", computers_items),
        key("/Computers/Software"): (b"software menu", software_items),
        key("/Computers/Hardware"): (b"hardware menu", []),
        key("/about.txt", ItemType.TEXT_FILE): (b"About this server\r\n", []),
        key("/cat.gif", ItemType.GIF_IMAGE): (b"GIF89a\x00\xff\x10binary", []),
        key("/broken"): "3 '/broken' does not exist (no handler found)",
        key("/Computers/Software/clients.txt", ItemType.TEXT_FILE): (b"UMN, Lynx, Forg\n", []),
    }


@pytest.fixture
def collaborator(pages):
    return CountingCollaborator(pages)


@pytest.fixture
def navigator(collaborator):
    return Navigator(collaborator)


@pytest.fixture
def sample_tree(tmp_path):
    """Create a served directory tree in a temp directory."""
    root = tmp_path / "gopher"
    root.mkdir()

    (root / "about.txt").write_text("About this server\n")
    (root / ".hidden").write_text("secret\n")

    docs = root / "docs"
    docs.mkdir()
    (docs / "note.txt").write_text("A note\n")
    (docs / "readme.md").write_text("# Readme\n")
    sub = docs / "sub"
    sub.mkdir()
    (sub / "deep.txt").write_text("Deep\n")

    pictures = root / "pictures"
    pictures.mkdir()
    (pictures / "cat.gif").write_bytes(b"GIF89a\x00\x01")
    (pictures / "dog.png").write_bytes(b"\x89PNG\r\n")
    (pictures / "archive.zip").write_bytes(b"PK\x03\x04")

    return root


@pytest.fixture
def sample_config(tmp_path, sample_tree):
    """Create a Config serving sample_tree."""
    from gophermech.config import CacheConfig, Config, ServerConfig

    return Config(
        root_directory=sample_tree,
        start_url="",
        save_directory=tmp_path / "saved",
        data_directory=tmp_path / "data",
        server=ServerConfig(host="localhost", port=7070),
        cache=CacheConfig(enabled=True, watch=False),
    )
