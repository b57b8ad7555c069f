"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Transcript rendering and scrolling
- Busy indicator display
- Input capture and submission
"""

from rich.text import Text
from textual.containers import Horizontal, VerticalScroll
from textual.message import Message
from textual.widgets import Input, Static

from ..chat import DisplayLine
from .config import INPUT_MAX_LENGTH, INPUT_PLACEHOLDER


def render_transcript(lines: list[DisplayLine]) -> Text:
    """Build a renderable for transcript lines with styled sender prefixes."""
    text = Text()
    for index, line in enumerate(lines):
        if index:
            text.append("\n")
        if line.prefix:
            style = "bold red" if line.is_error else "bold magenta"
            text.append(line.prefix, style=style)
            text.append(" ")
        text.append(line.text)
    return text


class TranscriptView(VerticalScroll):
    """Scrollable viewport over the chat transcript."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation"
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.shown_lines: list[str] = []

    def compose(self):
        yield Static(id="transcript-text")

    def show_lines(self, lines: list[DisplayLine], message_count: int = 0) -> None:
        """Replace the displayed transcript."""
        self.shown_lines = [str(line) for line in lines]
        self.query_one("#transcript-text", Static).update(render_transcript(lines))
        if message_count:
            self.border_subtitle = f"{message_count} messages"
        else:
            self.border_subtitle = "Conversation"

    def row_geometry(self) -> tuple[int, int]:
        """Scroll extent and page height in screen rows, after soft wrapping."""
        return self.max_scroll_y, self.scrollable_content_region.height

    def follow(self, position: int, at_bottom: bool) -> None:
        """Move the viewport to the session scroll position (in rows)."""
        if at_bottom:
            self.scroll_end(animate=False)
        else:
            self.scroll_to(y=position, animate=False)


class BusyIndicator(Static):
    """One-line spinner shown while a reply is outstanding."""

    busy_text = ""

    def set_text(self, text: str) -> None:
        self.busy_text = text
        self.update(text)
        self.set_class(bool(text), "-busy")


class ChatInputBar(Horizontal):
    """Single-line chat input.

    Newlines cannot be entered; Enter submits the line. The bar only
    reports what the user typed: whether a submission is sent is decided
    by the session.
    """

    class Submitted(Message):
        """Message sent when user presses Enter."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class Changed(Message):
        """Message sent when the input text changes."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        yield Input(
            placeholder=INPUT_PLACEHOLDER,
            max_length=INPUT_MAX_LENGTH,
            id="chat-input",
        )

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.post_message(self.Submitted(event.value))

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.post_message(self.Changed(event.value))

    @property
    def value(self) -> str:
        return self.query_one("#chat-input", Input).value

    @value.setter
    def value(self, text: str) -> None:
        self.query_one("#chat-input", Input).value = text

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", Input).focus()
