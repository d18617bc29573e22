"""Menu list widget showing the items of the current listing."""

from rich.text import Text

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.events import Key
from textual.message import Message
from textual.widgets import Input, Label, ListItem, ListView, Static

from ..types import Item, ItemType

TYPE_LABELS = {
    ItemType.MENU: ("DIR", "bright_cyan"),
    ItemType.TEXT_FILE: ("TXT", "bright_green"),
    ItemType.HTML: ("HTM", "bright_green"),
    ItemType.GIF_IMAGE: ("GIF", "bright_magenta"),
    ItemType.IMAGE: ("IMG", "bright_magenta"),
    ItemType.SOUND: ("SND", "bright_yellow"),
    ItemType.INDEX_SEARCH: ("ASK", "bright_yellow"),
    ItemType.ERROR: ("ERR", "bright_red"),
}


def item_label(item: Item) -> Text:
    """Rich label for a menu row: a type tag followed by the display string."""
    if item.item_type is ItemType.INLINE_TEXT:
        return Text(f"      {item.display}", style="dim")
    tag, color = TYPE_LABELS.get(item.item_type, ("BIN", "white"))
    label = Text()
    label.append(f"[{tag}] ", style=f"bold {color}")
    label.append(item.display)
    return label


class MenuRow(ListItem):
    """A list item for one menu entry.

    ``position`` is the 1-based index among selectable items, or None for
    inline text.
    """

    def __init__(self, item: Item, position: int | None) -> None:
        super().__init__(disabled=position is None)
        self.item = item
        self.position = position

    def compose(self) -> ComposeResult:
        yield Label(item_label(self.item))


class MenuList(Vertical):
    """Widget displaying the current menu."""

    DEFAULT_CSS = """
    MenuList {
        width: 1fr;
        height: 1fr;
    }

    MenuList > #menu-header {
        background: $primary-background;
        color: $accent;
        text-style: bold;
        padding: 0 1;
        height: 1;
    }

    MenuList > #pattern-input {
        height: 1;
        border: none;
        padding: 0 1;
        display: none;
    }

    MenuList > #pattern-input.visible {
        display: block;
    }

    MenuList > #menu-list-view {
        height: 1fr;
    }

    MenuList ListItem {
        padding: 0 1;
    }

    MenuList ListItem.--highlight {
        background: $accent;
    }
    """

    class ItemChosen(Message):
        """Message emitted when a selectable row is activated."""

        def __init__(self, position: int, item: Item) -> None:
            super().__init__()
            self.position = position
            self.item = item

    class PatternSubmitted(Message):
        """Message emitted when a display pattern is entered."""

        def __init__(self, pattern: str) -> None:
            super().__init__()
            self.pattern = pattern

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._items: list[Item] = []
        self._search_mode: bool = False

    def compose(self) -> ComposeResult:
        yield Static("MENU", id="menu-header")
        yield Input(placeholder="Select by display pattern...", id="pattern-input")
        yield ListView(id="menu-list-view")

    @property
    def list_view(self) -> ListView:
        return self.query_one("#menu-list-view", ListView)

    @property
    def pattern_input(self) -> Input:
        return self.query_one("#pattern-input", Input)

    def update_items(self, items: list[Item], title: str = "") -> None:
        """Show a new listing.

        Args:
            items: Menu items in listing order, inline text included
            title: Header suffix (usually the menu's URL)
        """
        self._items = list(items)
        self.exit_search_mode(notify=False)

        header = self.query_one("#menu-header", Static)
        header.update(f"MENU - {title}" if title else "MENU")

        list_view = self.list_view
        list_view.clear()

        position = 0
        first_selectable = None
        for row_index, item in enumerate(self._items):
            if item.item_type is ItemType.INLINE_TEXT:
                list_view.append(MenuRow(item, None))
                continue
            position += 1
            if first_selectable is None:
                first_selectable = row_index
            list_view.append(MenuRow(item, position))

        if first_selectable is not None:
            list_view.index = first_selectable

    def clear_items(self) -> None:
        self._items = []
        self.query_one("#menu-header", Static).update("MENU")
        self.list_view.clear()

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Handle Enter or click on a row."""
        row = event.item
        if isinstance(row, MenuRow) and row.position is not None:
            self.post_message(self.ItemChosen(row.position, row.item))

    def is_search_mode(self) -> bool:
        return self._search_mode

    def enter_search_mode(self) -> None:
        """Show the pattern input and focus it."""
        self._search_mode = True
        pattern_input = self.pattern_input
        pattern_input.value = ""
        pattern_input.add_class("visible")
        pattern_input.focus()

    def exit_search_mode(self, notify: bool = True) -> None:
        """Hide the pattern input and return focus to the list."""
        was_searching = self._search_mode
        self._search_mode = False
        pattern_input = self.pattern_input
        pattern_input.remove_class("visible")
        pattern_input.value = ""
        if was_searching and notify:
            self.list_view.focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "pattern-input":
            return
        event.stop()
        pattern = event.value.strip()
        self.exit_search_mode()
        if pattern:
            self.post_message(self.PatternSubmitted(pattern))

    def on_key(self, event: Key) -> None:
        if self._search_mode and event.key == "escape":
            event.stop()
            self.exit_search_mode()
