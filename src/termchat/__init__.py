"""
termchat: a terminal chat client for OpenAI-compatible completion services.

Each module hides a specific design decision: the chat package owns the
session state machine and request handoff, llm hides the provider, and
ui hides the terminal rendering.
"""

__version__ = "0.1.0"

from .chat import (
    ChatSession,
    CompletionGateway,
    CompletionResult,
    Message,
    ResponseChannel,
    Role,
    wrap_lines,
)
from .config import ClientConfig, load_config
from .exceptions import ConfigError, ProviderError, TermchatError

__all__ = [
    "ChatSession",
    "ClientConfig",
    "CompletionGateway",
    "CompletionResult",
    "ConfigError",
    "Message",
    "ProviderError",
    "ResponseChannel",
    "Role",
    "TermchatError",
    "load_config",
    "wrap_lines",
]
