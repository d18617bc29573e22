"""Navigation action handlers for GopherMechApp."""

from __future__ import annotations

import logging
import re

from ..errors import GopherMechError, HistoryBoundaryError, NoMatchError
from ..widgets import MenuList

logger = logging.getLogger(__name__)


class NavigationActionsMixin:
    """Mixin providing movement actions (select, up, down, reload, cache toggle, search)."""

    async def _navigate_with(self, move, *args, **kwargs) -> bool:
        """Run one navigator movement and redraw, reporting failures.

        Returns True if the movement succeeded.
        """
        try:
            move(*args, **kwargs)
        except HistoryBoundaryError as e:
            self.notify(str(e), severity="warning")
            return False
        except NoMatchError:
            self.notify("No matching item", severity="warning")
            return False
        except GopherMechError as e:
            logger.warning("Navigation failed: %s", e)
            self.notify(str(e), severity="error")
            return False

        await self._show_current()
        return True

    async def on_menu_list_item_chosen(self, event: MenuList.ItemChosen) -> None:
        """Follow the activated menu row."""
        await self._navigate_with(self.navigator.select_item, index=event.position)

    async def on_menu_list_pattern_submitted(self, event: MenuList.PatternSubmitted) -> None:
        """Follow the first item whose display string matches the pattern."""
        try:
            pattern = re.compile(event.pattern, re.IGNORECASE)
        except re.error as e:
            self.notify(f"Bad pattern: {e}", severity="error")
            return
        await self._navigate_with(self.navigator.select_item, pattern)

    async def action_go_up(self) -> None:
        """Go up (back) one item, or leave search mode."""
        menu_list = self.query_one("#menu-list", MenuList)
        if menu_list.is_search_mode():
            menu_list.exit_search_mode()
            return
        await self._navigate_with(self.navigator.up)

    async def action_go_down(self) -> None:
        """Go down (forward) one item."""
        await self._navigate_with(self.navigator.down)

    async def action_reload(self) -> None:
        """Fetch the current item again."""
        if await self._navigate_with(self.navigator.reload):
            self.notify("Reloaded")

    async def action_go_home(self) -> None:
        """Navigate to the start URL."""
        await self._navigate_with(self.navigator.navigate, self.start_request)

    def action_toggle_cache(self) -> None:
        """Turn reuse of cached items on or off."""
        self.navigator.cache_enabled = not self.navigator.cache_enabled
        state = "on" if self.navigator.cache_enabled else "off"
        self.notify(f"Cache {state}")
        self._refresh_location()

    def action_search(self) -> None:
        """Enter pattern selection mode."""
        menu_list = self.query_one("#menu-list", MenuList)
        if not menu_list.is_search_mode():
            menu_list.enter_search_mode()

    def action_help(self) -> None:
        """Show help information."""
        self.notify(
            "Enter=Select, /=Select by pattern, Backspace=Up, f=Forward, h=Home, r=Reload, s=Save, c=Cache, q=Quit",
            timeout=5,
        )
