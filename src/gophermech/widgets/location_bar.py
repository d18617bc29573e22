"""Location bar showing where the navigator is."""

from rich.text import Text

from textual.widgets import Static


def build_location(url: str | None, cursor: int | None, depth: int, cache_enabled: bool) -> Text:
    """Build the bar as a Rich Text object: URL, history position, cache state."""
    text = Text()
    text.append(" gophermech ", style="bold black on bright_cyan")
    text.append(" ")
    text.append(url or "(nowhere yet)", style="bold" if url else "dim")
    if cursor is not None:
        text.append(f"  [{cursor + 1}/{depth}]", style="bright_yellow")
    text.append("  cache ", style="dim")
    if cache_enabled:
        text.append("on", style="bright_green")
    else:
        text.append("off", style="bright_red")
    return text


class LocationBar(Static):
    """One-line header replacing the default Textual Header."""

    DEFAULT_CSS = """
    LocationBar {
        height: 1;
        width: 100%;
        background: $primary-background;
    }
    """

    def show(self, url: str | None, cursor: int | None, depth: int, cache_enabled: bool) -> None:
        self.update(build_location(url, cursor, depth, cache_enabled))
