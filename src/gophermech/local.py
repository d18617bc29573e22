"""Serve a local directory tree as a Gopher hierarchy."""

import logging
from pathlib import Path, PurePath, PurePosixPath

from .errors import ProtocolError
from .types import DEFAULT_PORT, Item, ItemType, Request, Response

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = {".txt", ".md", ".taskpaper", ".rst", ".csv", ".json", ".py", ".toml", ".log", ""}

SUFFIX_TYPES = {
    ".gif": ItemType.GIF_IMAGE,
    ".png": ItemType.IMAGE,
    ".jpg": ItemType.IMAGE,
    ".jpeg": ItemType.IMAGE,
    ".bmp": ItemType.IMAGE,
    ".html": ItemType.HTML,
    ".htm": ItemType.HTML,
    ".wav": ItemType.SOUND,
    ".mp3": ItemType.SOUND,
    ".hqx": ItemType.BINHEX_FILE,
    ".uue": ItemType.UUENCODED_FILE,
}


def item_type_for(path: Path) -> ItemType:
    """Guess the item type of a file or directory from its suffix."""
    if path.is_dir():
        return ItemType.MENU
    suffix = path.suffix.lower()
    if suffix in TEXT_EXTENSIONS:
        return ItemType.TEXT_FILE
    return SUFFIX_TYPES.get(suffix, ItemType.BINARY_FILE)


def render_menu(items: list[Item]) -> bytes:
    """Render a listing as menu lines terminated by a lone period."""
    lines = [item.as_menu_line() for item in items]
    lines.append(".")
    return ("\r\n".join(lines) + "\r\n").encode("utf-8")


class LocalCollaborator:
    """Answers requests for ``host:port`` from files under ``root``.

    Selectors are slash-separated paths relative to the root. Hidden files
    are not served.
    """

    def __init__(self, root: Path, host: str = "localhost", port: int = DEFAULT_PORT) -> None:
        self.root = Path(root).expanduser().resolve()
        self.host = host
        self.port = port

    def root_request(self) -> Request:
        return Request(host=self.host, port=self.port)

    def fetch(self, request: Request) -> Response:
        if request.host.lower() != self.host.lower() or request.port != self.port:
            raise ProtocolError(f"Unknown server {request.host}:{request.port}")

        path = self._resolve(request.selector)
        if path.is_dir():
            logger.debug("Listing %s", path)
            items = self._list_directory(path)
            return Response(request, body=render_menu(items), listing=items)

        try:
            body = path.read_bytes()
        except OSError as e:
            raise ProtocolError(f"Couldn't read {request.selector}: {e}") from e
        return Response(request, body=body)

    def identities_for_path(self, path: Path) -> list[str]:
        """Cache identities that go stale when ``path`` changes.

        That is the item itself (as menu and as file) and the menu listing
        its parent directory.
        """
        path = Path(path).resolve()
        try:
            relative = path.relative_to(self.root)
        except ValueError:
            return []

        identities = []

        def add(selector: str, item_type: ItemType) -> None:
            identity = Request(self.host, self.port, selector, item_type).canonical_identity()
            if identity not in identities:
                identities.append(identity)

        for selector in self._selectors_for(relative):
            add(selector, ItemType.MENU)
            add(selector, item_type_for(path))
        if relative.parts:
            for parent in self._selectors_for(relative.parent):
                add(parent, ItemType.MENU)
        return identities

    def _selector_for(self, relative: Path) -> str:
        if not relative.parts:
            return ""
        return "/" + "/".join(relative.parts)

    def _selectors_for(self, relative: PurePath) -> list[str]:
        """Every selector served for ``relative``; the root answers to two."""
        if not relative.parts:
            return ["", "/"]
        return [self._selector_for(relative)]

    def _resolve(self, selector: str) -> Path:
        parts = PurePosixPath("/" + selector).parts[1:]
        # Only the canonical spelling of a path is served
        if selector not in self._selectors_for(PurePosixPath(*parts)):
            raise ProtocolError(f"Not found: {selector}")
        if any(part.startswith(".") for part in parts):
            raise ProtocolError(f"Not found: {selector}")

        path = self.root.joinpath(*parts).resolve()
        if path != self.root and self.root not in path.parents:
            raise ProtocolError(f"Not found: {selector}")
        if not path.exists():
            raise ProtocolError(f"Not found: {selector}")
        return path

    def _list_directory(self, directory: Path) -> list[Item]:
        relative = directory.relative_to(self.root)
        title = "/" + "/".join(relative.parts)
        items = [Item(ItemType.INLINE_TEXT, f"Index of {title}", "", self.host, self.port)]

        try:
            children = [p for p in directory.iterdir() if not p.name.startswith(".")]
        except PermissionError as e:
            raise ProtocolError(f"Permission denied: {title}") from e

        children.sort(key=lambda p: (not p.is_dir(), p.name.lower()))
        for child in children:
            items.append(
                Item(
                    item_type=item_type_for(child),
                    display=child.name,
                    selector=self._selector_for(child.relative_to(self.root)),
                    host=self.host,
                    port=self.port,
                )
            )
        return items
