"""Save action handler for GopherMechApp."""

from __future__ import annotations

from pathlib import PurePosixPath

from ..errors import NoCurrentItemError


def default_filename(selector: str, is_menu: bool) -> str:
    """File name for a saved item: the selector's last segment, or a fallback."""
    name = PurePosixPath(selector).name
    if name and not name.startswith("."):
        return name
    return "gopher-menu.txt" if is_menu else "gopher-item"


class FileActionsMixin:
    """Mixin providing the save action."""

    def action_save(self) -> None:
        """Save the current item into the configured save directory."""
        try:
            response = self.navigator.current_item
        except NoCurrentItemError:
            self.notify("Nothing to save yet", severity="warning")
            return

        save_dir = self.config.save_directory
        filename = default_filename(response.request.selector, response.is_menu())
        target = save_dir / filename

        try:
            save_dir.mkdir(parents=True, exist_ok=True)
            written = self.navigator.save_item(target)
        except OSError as e:
            self.notify(f"Save failed: {e}", severity="error")
            return

        self.notify(f"Saved to {written}", timeout=5)
