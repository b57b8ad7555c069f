"""Data models for the chat session.

Hides the in-memory representation of transcript messages and
completion results from the UI and the provider layer.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Sender of a message. The value is the provider wire role."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class Message(BaseModel):
    """A single transcript entry."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Message body as displayed")
    role: Role = Field(description="Role of the message sender")
    is_error: bool = Field(
        default=False,
        description="Inline error line; shown to the user but never sent to the provider"
    )

    @property
    def prefix(self) -> str:
        """Display prefix for this message."""
        if self.is_error:
            return "Error:"
        return _PREFIXES[self.role]


_PREFIXES = {
    Role.USER: "You:",
    Role.ASSISTANT: "Assistant:",
    Role.SYSTEM: "System:",
}


class ErrorInfo(BaseModel):
    """Description of a failed completion request."""

    model_config = ConfigDict(frozen=True)

    message: str = Field(description="Human readable error message")
    kind: str = Field(default="Exception", description="Exception class name")

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorInfo":
        message = str(exc) or exc.__class__.__name__
        return cls(message=message, kind=exc.__class__.__name__)


class CompletionResult(BaseModel):
    """Outcome of one completion request.

    Exactly one of ``content`` and ``error`` is meaningful: when ``error``
    is set the content is empty and must not be rendered as a message body.
    """

    model_config = ConfigDict(frozen=True)

    content: str = Field(default="", description="Generated reply text")
    role: Role = Field(default=Role.ASSISTANT, description="Role returned by the provider")
    error: ErrorInfo | None = Field(default=None, description="Set when the request failed")

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, exc: BaseException) -> "CompletionResult":
        """Build a failed result from an exception."""
        return cls(error=ErrorInfo.from_exception(exc))
