"""Embedding surface for external documentation.

A terminal cannot host a browser frame, so the surface shows what it embeds
(title, url, granted sandbox permissions) and hands the url to the system
browser on request. Fetching and rendering belong to the browser.
"""

from __future__ import annotations

from rich.style import Style
from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Label, Static


class EmbedFrame(Vertical, can_focus=True):
    """Generic embedding surface configured with a url and a permission set."""

    DEFAULT_CSS = """
    EmbedFrame {
        padding: 1 2;
        height: 1fr;
    }
    EmbedFrame > .embed-title {
        text-style: bold;
        color: $primary;
        margin-bottom: 1;
    }
    EmbedFrame > .embed-sandbox {
        color: $text-muted;
    }
    EmbedFrame > .embed-hint {
        margin-top: 1;
        color: $text-muted;
    }
    EmbedFrame:focus > .embed-title {
        text-style: bold underline;
    }
    """

    BINDINGS = [
        Binding("o", "open_in_browser", "Open in browser"),
    ]

    def __init__(
        self,
        title: str,
        url: str,
        sandbox: frozenset[str],
        *,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.frame_title = title
        self.url = url
        self.sandbox = sandbox

    def compose(self) -> ComposeResult:
        yield Label(self.frame_title, classes="embed-title")
        yield Static(Text(self.url, style=Style(link=self.url, underline=True)), classes="embed-url")
        granted = " ".join(sorted(self.sandbox)) or "none"
        yield Static(f"sandbox: {granted}", classes="embed-sandbox", markup=False)
        yield Static("Press o to open in your browser.", classes="embed-hint")

    def action_open_in_browser(self) -> None:
        self.app.open_url(self.url)
