"""Main Textual application for gophermech."""

import logging
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer

from .actions import FileActionsMixin, NavigationActionsMixin
from .config import Config
from .local import LocalCollaborator
from .navigator import Navigator
from .types import Request
from .watcher import TreeWatcher
from .widgets import ContentView, LocationBar, MenuList

logger = logging.getLogger(__name__)


def forget_changed_paths(navigator: Navigator, collaborator: LocalCollaborator, paths: list[Path]) -> int:
    """Drop every cached item that changed files make stale.

    Returns the number of identities forgotten.
    """
    forgotten = 0
    for path in paths:
        for identity in collaborator.identities_for_path(path):
            if navigator.item_cache.is_cached(identity):
                forgotten += 1
            navigator.forget(identity)
    return forgotten


class GopherMechApp(NavigationActionsMixin, FileActionsMixin, App):
    """gophermech - Gopherspace browser TUI."""

    TITLE = "gophermech"
    SUB_TITLE = "Gopherspace Browser"

    CSS = """
    #main-container {
        width: 100%;
        height: 1fr;
    }

    #menu-list {
        width: 40%;
        height: 100%;
        border: solid $accent;
    }

    #menu-list:focus-within {
        border: solid cyan;
    }

    #content-view {
        width: 60%;
        height: 100%;
        border: solid $success;
    }

    #content-view:focus-within {
        border: solid green;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("backspace", "go_up", "Up"),
        Binding("escape", "go_up", "Up", show=False),
        Binding("f", "go_down", "Forward"),
        Binding("h", "go_home", "Home"),
        Binding("r", "reload", "Reload"),
        Binding("s", "save", "Save"),
        Binding("c", "toggle_cache", "Cache"),
        Binding("slash", "search", "Select by pattern"),
        Binding("?", "help", "Help"),
    ]

    def __init__(self, config: Config, navigator: Navigator | None = None, start: Request | None = None) -> None:
        super().__init__()
        self.config = config
        collaborator = LocalCollaborator(
            config.root_directory,
            host=config.server.host,
            port=config.server.port,
        )
        self._collaborator = collaborator
        self.navigator = navigator or Navigator(collaborator, cache=config.cache.enabled)
        if start is None:
            start = Request.from_url(config.start_url) if config.start_url else collaborator.root_request()
        self.start_request = start
        self._watcher: TreeWatcher | None = None

    def compose(self) -> ComposeResult:
        yield LocationBar(id="location-bar")
        with Horizontal(id="main-container"):
            yield MenuList(id="menu-list", classes="panel")
            yield ContentView(id="content-view", classes="panel")
        yield Footer()

    async def on_mount(self) -> None:
        """Open the start item and start watching the served tree."""
        self._refresh_location()
        self.query_one("#menu-list", MenuList).list_view.focus()

        if self.config.cache.watch and self.config.root_directory.is_dir():
            self._watcher = TreeWatcher(self.config.root_directory, self._on_tree_change)
            self._watcher.start()

        logger.info("Starting at %s", self.start_request.canonical_identity())
        await self._navigate_with(self.navigator.navigate, self.start_request)

    async def on_unmount(self) -> None:
        """Clean up when app closes."""
        if self._watcher:
            self._watcher.stop()

    def _on_tree_change(self, paths: list[Path]) -> None:
        """Handle served file changes (called from watcher thread)."""
        self.call_from_thread(self._forget_paths, paths)

    def _forget_paths(self, paths: list[Path]) -> None:
        """Drop cached items for changed paths, on the main thread."""
        forgotten = forget_changed_paths(self.navigator, self._collaborator, paths)
        logger.info("Forgot %d cached item(s) after %d change(s)", forgotten, len(paths))

    def _refresh_location(self) -> None:
        history = self.navigator.history
        url = None
        if self.navigator.has_current_item():
            url = self.navigator.canonical_identity()
        self.query_one("#location-bar", LocationBar).show(
            url, history.cursor, len(history), self.navigator.cache_enabled
        )

    async def _show_current(self) -> None:
        """Redraw the menu and content panels for the current item."""
        self._refresh_location()
        response = self.navigator.current_item
        menu_list = self.query_one("#menu-list", MenuList)
        content_view = self.query_one("#content-view", ContentView)

        if response.is_menu():
            menu_list.update_items(list(response.items()), response.canonical_identity())
            await content_view.show_response(None)
            menu_list.list_view.focus()
        else:
            menu_list.clear_items()
            await content_view.show_response(response)
            content_view.scroll_view.focus()


def run_app(config: Config, start: Request | None = None) -> None:
    """Run the gophermech application."""
    app = GopherMechApp(config, start=start)
    app.run()
