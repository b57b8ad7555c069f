"""Chat coordination layer.

Module structure (each module hides a design decision):
- models.py: Transcript messages and completion results
- wrap.py: Fixed-width reflow of long responses
- channel.py: Handoff of results into the UI event loop
- gateway.py: Outbound completion requests
- session.py: Session state machine
"""

from .channel import ResponseChannel
from .gateway import CompletionGateway, to_wire_messages
from .models import CompletionResult, ErrorInfo, Message, Role
from .session import ChatSession, DisplayLine, SessionPhase, Viewport
from .wrap import wrap_lines

__all__ = [
    "ChatSession",
    "CompletionGateway",
    "CompletionResult",
    "DisplayLine",
    "ErrorInfo",
    "Message",
    "ResponseChannel",
    "Role",
    "SessionPhase",
    "Viewport",
    "to_wire_messages",
    "wrap_lines",
]
