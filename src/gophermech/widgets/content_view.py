"""Content view widget for text items."""

from textual.app import ComposeResult
from textual.containers import Vertical, VerticalScroll
from textual.widgets import Markdown, Static

from ..protocols import ResponseLike

# Larger documents are cut off in the view; save_item still writes everything
MAX_DISPLAY_CHARS = 200_000


def describe_content(response: ResponseLike) -> str:
    """Markdown shown for an item: its text, or a note for binary content."""
    if response.is_text():
        text = response.text()
        if len(text) > MAX_DISPLAY_CHARS:
            text = text[:MAX_DISPLAY_CHARS] + "\n\n*... truncated, press s to save the full item*"
        if response.request.selector.lower().endswith(".md"):
            return text
        return "```\n" + text.replace("```", "` ` `") + "\n```"
    size = len(response.content())
    return f"*Binary item ({size:,} bytes). Press s to save it.*"


class ContentView(Vertical):
    """Widget displaying the current non-menu item."""

    DEFAULT_CSS = """
    ContentView {
        width: 1fr;
        height: 1fr;
    }

    ContentView > #content-header {
        background: $primary-background;
        color: $success;
        text-style: bold;
        padding: 0 1;
        height: 1;
    }

    ContentView > VerticalScroll {
        height: 1fr;
    }

    ContentView Markdown {
        padding: 0 1;
    }
    """

    def compose(self) -> ComposeResult:
        yield Static("CONTENT", id="content-header")
        with VerticalScroll(id="content-scroll"):
            yield Markdown(id="content-body", open_links=False)

    @property
    def scroll_view(self) -> VerticalScroll:
        return self.query_one("#content-scroll", VerticalScroll)

    async def show_response(self, response: ResponseLike | None) -> None:
        """Display an item, or clear the view when ``response`` is None."""
        header = self.query_one("#content-header", Static)
        body = self.query_one("#content-body", Markdown)

        if response is None:
            header.update("CONTENT")
            await body.update("")
            return

        header.update(f"CONTENT - {response.canonical_identity()}")
        await body.update(describe_content(response))
        self.scroll_view.scroll_home(animate=False)
