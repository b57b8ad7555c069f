"""Main Textual TUI application.

Runs the render loop: feeds key, resize and timer events plus response
channel deliveries into the chat session, and repaints from its state.
"""

import asyncio
import logging

from rich.markup import escape
from textual import events, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Static

from ..chat import ChatSession, CompletionGateway, CompletionResult, Message
from .config import HELP_TEXT, SPINNER_INTERVAL
from .styles import APP_CSS
from .themes import TERMCHAT_DARK
from .widgets import BusyIndicator, ChatInputBar, TranscriptView

logger = logging.getLogger(__name__)


class ChatApp(App[str]):
    """Textual TUI for chatting with a completion service.

    The app exits with the unsent input buffer as its return value.
    """

    CSS = APP_CSS
    TITLE = "termchat"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True),
        Binding("escape", "quit", "Quit", show=False, priority=True),
        Binding("f10", "toggle_fullscreen", "Full Screen"),
        Binding("up", "scroll_transcript(-1)", "Scroll Up", show=False),
        Binding("down", "scroll_transcript(1)", "Scroll Down", show=False),
        Binding("pageup", "page_transcript(-1)", "Page Up", show=False),
        Binding("pagedown", "page_transcript(1)", "Page Down", show=False),
    ]

    def __init__(self, gateway: CompletionGateway, session: ChatSession | None = None) -> None:
        super().__init__()
        self._gateway = gateway
        self.session = session or ChatSession()
        self.dispatched_requests = 0
        self._view_ready = False

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield TranscriptView(id="transcript")
        yield BusyIndicator(id="busy-indicator")
        yield ChatInputBar(id="chat-input-bar")
        yield Static(HELP_TEXT, id="help-line")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(TERMCHAT_DARK)
        self.theme = "termchat-dark"
        self.sub_title = self._gateway.model_name

        self.session.resize(self.size.width, self.size.height)
        self._listen_for_results()
        self.set_interval(SPINNER_INTERVAL, self._on_spinner_tick)
        self._view_ready = True
        self._refresh_view()
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_resize(self, event: events.Resize) -> None:
        self.session.resize(event.size.width, event.size.height)
        if self._view_ready:
            self._refresh_view()

    def on_chat_input_bar_changed(self, event: ChatInputBar.Changed) -> None:
        self.session.set_input(event.value)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        request = self.session.submit(event.value)
        if request is None:
            return

        self.query_one("#chat-input-bar", ChatInputBar).value = self.session.input_buffer
        self._refresh_view()
        self.dispatched_requests += 1
        self._request_completion(request)

    @work(exclusive=True, group="completion")
    async def _request_completion(self, request: tuple[Message, ...]) -> None:
        """Run the completion request as a background async worker."""
        await self._gateway.submit(request)

    @work(group="listener")
    async def _listen_for_results(self) -> None:
        """Consume channel deliveries for the lifetime of the app."""
        channel = self._gateway.channel
        while True:
            result = await channel.get()
            self._apply_result(result)

    def _apply_result(self, result: CompletionResult) -> None:
        if self.session.terminated:
            return
        self.session.receive(result)
        self.query_one("#chat-input-bar", ChatInputBar).value = self.session.input_buffer
        self._refresh_view()
        if not result.ok:
            self.notify(f"Error: {escape(result.error.message[:50])}", severity="error", timeout=5)

    def _on_spinner_tick(self) -> None:
        if self.session.tick():
            self.query_one("#busy-indicator", BusyIndicator).set_text(self.session.busy_text())

    def _refresh_view(self) -> None:
        transcript = self.query_one("#transcript", TranscriptView)
        transcript.show_lines(self.session.display_lines(), len(self.session.transcript))
        transcript.follow(self.session.scroll_position, self.session.at_bottom)
        self.query_one("#busy-indicator", BusyIndicator).set_text(self.session.busy_text())

    def action_scroll_transcript(self, lines: int) -> None:
        """Scroll the transcript by a number of rows."""
        self._sync_geometry()
        self.session.scroll_by(lines)
        self._follow()

    def action_page_transcript(self, direction: int) -> None:
        """Scroll the transcript by a page."""
        self._sync_geometry()
        if direction < 0:
            self.session.page_up()
        else:
            self.session.page_down()
        self._follow()

    def _follow(self) -> None:
        transcript = self.query_one("#transcript", TranscriptView)
        transcript.follow(self.session.scroll_position, self.session.at_bottom)

    def _sync_geometry(self) -> None:
        """Scroll in the rows the transcript actually shows."""
        transcript = self.query_one("#transcript", TranscriptView)
        self.session.set_geometry(*transcript.row_geometry())

    def action_toggle_fullscreen(self) -> None:
        """Toggle a full screen transcript without the surrounding chrome."""
        self.screen.toggle_class("-fullscreen")

    async def action_quit(self) -> None:
        """Stop the session and exit with the unsent input."""
        self.session.set_input(self.query_one("#chat-input-bar", ChatInputBar).value)
        buffer = self.session.terminate()
        dropped = 0
        while self._gateway.channel.get_nowait() is not None:
            dropped += 1
        if dropped:
            logger.debug("Discarded %d undelivered result(s)", dropped)
        logger.debug("Quit with %d buffered character(s)", len(buffer))
        self.exit(result=buffer)


async def run_chat_tui(
    gateway: CompletionGateway,
    session: ChatSession | None = None,
    inline: bool = False,
) -> str:
    """Run the Textual TUI.

    Args:
        gateway: Completion gateway used for every request
        session: Chat session (a new one is created if omitted)
        inline: Render below the prompt instead of on the alternate screen

    Returns:
        The unsent input buffer at exit
    """
    app = ChatApp(gateway=gateway, session=session)
    try:
        result = await app.run_async(inline=inline)
    except (KeyboardInterrupt, asyncio.CancelledError):
        result = app.session.terminate()
    return result or ""
