"""Chat session state machine.

Owns the transcript, the input buffer, the busy flag and the viewport
scroll position. All mutation happens on the UI event loop; the only
concurrency guard is the Idle/Awaiting phase, which keeps at most one
completion request outstanding.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from .models import CompletionResult, ErrorInfo, Message, Role
from .wrap import wrap_lines

logger = logging.getLogger(__name__)

# Responses longer than this are reflowed before display
WRAP_THRESHOLD = 150
WRAP_WIDTH = 120

# Rows taken by the input box and the surrounding chrome
INPUT_HEIGHT = 3
VIEWPORT_MARGIN = 5

SPINNER_FRAMES = ("🌍", "🌎", "🌏")

WELCOME_TEXT = "Welcome to the chat room!\nType a message and press Enter to send."


class SessionPhase(str, Enum):
    """Whether a completion request is outstanding."""

    IDLE = "idle"
    AWAITING = "awaiting"


class DisplayLine(NamedTuple):
    """One transcript line with the sender it belongs to.

    ``prefix`` is empty on continuation lines of a multi-line message.
    """

    text: str
    prefix: str = ""
    is_error: bool = False

    def __str__(self) -> str:
        return f"{self.prefix} {self.text}" if self.prefix else self.text


@dataclass
class Viewport:
    """Visible transcript area, known only after the first resize."""

    width: int
    height: int


class ChatSession:
    """State machine for a single chat session.

    Transitions:
        Idle + submit(non-empty)   -> Awaiting (returns the request to dispatch)
        Idle + submit(empty)       -> Idle (no-op)
        Awaiting + submit(...)     -> Awaiting (ignored, text stays in the buffer)
        Awaiting + receive(result) -> Idle
        any + terminate()          -> terminated, later events are ignored

    Example:
        session = ChatSession()
        request = session.submit("Hello")
        if request is not None:
            result = await gateway.submit(request)
            session.receive(result)
    """

    def __init__(
        self,
        system_prompt: str | None = None,
        wrap_threshold: int = WRAP_THRESHOLD,
        wrap_width: int = WRAP_WIDTH,
        input_height: int = INPUT_HEIGHT,
    ) -> None:
        self._transcript: list[Message] = []
        self._phase = SessionPhase.IDLE
        self._input_buffer = ""
        self._scroll_position = 0
        self._last_error: ErrorInfo | None = None
        self._viewport: Viewport | None = None
        self._geometry: tuple[int, int] | None = None
        self._spinner_frame = 0
        self._terminated = False
        self._wrap_threshold = wrap_threshold
        self._wrap_width = wrap_width
        self._input_height = input_height
        self.ignored_submits = 0

        if system_prompt and system_prompt.strip():
            self._transcript.append(Message(role=Role.SYSTEM, content=system_prompt.strip()))

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def transcript(self) -> tuple[Message, ...]:
        return tuple(self._transcript)

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def pending(self) -> bool:
        """True while exactly one request is outstanding."""
        return self._phase is SessionPhase.AWAITING

    @property
    def input_buffer(self) -> str:
        return self._input_buffer

    @property
    def scroll_position(self) -> int:
        return self._scroll_position

    @property
    def last_error(self) -> ErrorInfo | None:
        return self._last_error

    @property
    def viewport(self) -> Viewport | None:
        return self._viewport

    @property
    def spinner_frame(self) -> int:
        return self._spinner_frame

    @property
    def terminated(self) -> bool:
        return self._terminated

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def set_input(self, text: str) -> None:
        """Mirror the input widget contents into the buffer."""
        if self._terminated:
            return
        self._input_buffer = text

    def submit(self, text: str | None = None) -> tuple[Message, ...] | None:
        """Handle a submit key press.

        Args:
            text: Submitted text (None uses the current input buffer)

        Returns:
            The conversation snapshot to dispatch, or None if nothing
            should be sent.
        """
        if self._terminated:
            return None
        if text is not None:
            self._input_buffer = text

        if self.pending:
            # Input stays live but only one request may be in flight
            self.ignored_submits += 1
            logger.debug("Submit ignored while awaiting a response")
            return None

        content = self._input_buffer.strip()
        if not content:
            return None

        self._transcript.append(Message(role=Role.USER, content=content))
        self._input_buffer = ""
        self._phase = SessionPhase.AWAITING
        self._spinner_frame = 0
        self.scroll_to_bottom()
        logger.info("Submitted message #%d", len(self._transcript))
        return self.request_snapshot()

    def receive(self, result: CompletionResult) -> Message:
        """Handle a completion result delivered by the response channel.

        Args:
            result: The delivered result

        Returns:
            The transcript entry that was appended
        """
        if not self.pending:
            logger.warning("Completion result received while idle")

        if result.error is not None:
            message = Message(role=Role.ASSISTANT, content=result.error.message, is_error=True)
            self._last_error = result.error
            logger.info("Request failed: %s", result.error.message)
        else:
            content = result.content
            if len(content) > self._wrap_threshold:
                content = "\n".join(wrap_lines(content, self._wrap_width))
            message = Message(role=result.role, content=content)
            self._last_error = None

        self._transcript.append(message)
        self._input_buffer = ""
        self._phase = SessionPhase.IDLE
        self._spinner_frame = 0
        self.scroll_to_bottom()
        return message

    def terminate(self) -> str:
        """Stop processing events and return the unsent input buffer."""
        self._terminated = True
        logger.info("Session terminated")
        return self._input_buffer

    def resize(self, width: int, height: int) -> Viewport:
        """Recompute the viewport for a new terminal size."""
        viewport_height = max(1, height - self._input_height - VIEWPORT_MARGIN)
        if self._viewport is None:
            self._viewport = Viewport(width=width, height=viewport_height)
            logger.debug("Viewport initialized at %dx%d", width, viewport_height)
        else:
            self._viewport.width = width
            self._viewport.height = viewport_height
        self._scroll_position = min(self._scroll_position, self.max_scroll)
        return self._viewport

    def set_geometry(self, max_scroll: int, page_height: int) -> None:
        """Adopt the scroll extent measured by the view in screen rows.

        The view soft-wraps lines to its own width, so once it has been
        laid out its row counts replace the logical line estimate. A
        session that was following the bottom keeps following it.
        """
        following = self.at_bottom
        self._geometry = (max(0, max_scroll), max(1, page_height))
        if following:
            self._scroll_position = self.max_scroll
        else:
            self._scroll_position = min(self._scroll_position, self.max_scroll)

    def tick(self) -> bool:
        """Advance the busy indicator. Returns True if the frame changed."""
        if not self.pending or self._terminated:
            return False
        self._spinner_frame = (self._spinner_frame + 1) % len(SPINNER_FRAMES)
        return True

    # ------------------------------------------------------------------
    # Scrolling
    # ------------------------------------------------------------------

    @property
    def max_scroll(self) -> int:
        if self._geometry is not None:
            return self._geometry[0]
        if self._viewport is None:
            return 0
        return max(0, len(self.render_lines()) - self._viewport.height)

    @property
    def at_bottom(self) -> bool:
        return self._scroll_position >= self.max_scroll

    def scroll_to_bottom(self) -> None:
        self._scroll_position = self.max_scroll

    def scroll_by(self, delta: int) -> int:
        """Scroll by ``delta`` lines, clamped to the transcript."""
        self._scroll_position = max(0, min(self.max_scroll, self._scroll_position + delta))
        return self._scroll_position

    def page_up(self) -> int:
        return self.scroll_by(-self._page_size())

    def page_down(self) -> int:
        return self.scroll_by(self._page_size())

    def _page_size(self) -> int:
        if self._geometry is not None:
            return self._geometry[1]
        return self._viewport.height if self._viewport else 1

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def request_snapshot(self) -> tuple[Message, ...]:
        """Conversation context for the provider. Error lines are excluded."""
        return tuple(msg for msg in self._transcript if not msg.is_error)

    def display_lines(self) -> list[DisplayLine]:
        """Transcript lines tagged with their sender, or the welcome text."""
        if not self._transcript:
            return [DisplayLine(line) for line in WELCOME_TEXT.split("\n")]

        lines: list[DisplayLine] = []
        for msg in self._transcript:
            first, *rest = msg.content.split("\n")
            lines.append(DisplayLine(first, prefix=msg.prefix, is_error=msg.is_error))
            lines.extend(DisplayLine(line) for line in rest)
        return lines

    def render_lines(self) -> list[str]:
        """Transcript as plain display lines, or the welcome text when empty."""
        return [str(line) for line in self.display_lines()]

    def busy_text(self) -> str:
        if not self.pending:
            return ""
        return f"{SPINNER_FRAMES[self._spinner_frame]} Thinking..."
