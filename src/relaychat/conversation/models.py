"""Data models for the conversation.

Hides how a single chat message and its lifecycle are represented.
Messages are immutable; the store replaces an entry to update it.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Sender(str, Enum):
    """Who wrote a message."""

    USER = "user"
    BOT = "bot"


class MessageStatus(str, Enum):
    """Lifecycle of a bot message."""

    PENDING = "pending"  # Waiting on the relay
    DONE = "done"        # Reply received
    ERROR = "error"      # Relay call failed, retry available


class Message(BaseModel):
    """A single message in the conversation."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0, description="Sequence number, unique within a store")
    sender: Sender = Field(description="Author of the message")
    text: str = Field(description="Displayed text")
    status: MessageStatus | None = Field(
        default=None,
        description="Lifecycle status, set on bot messages only"
    )
    original_prompt: str | None = Field(
        default=None,
        description="Prompt this bot message answers; resent on retry"
    )

    @property
    def is_bot(self) -> bool:
        return self.sender == Sender.BOT

    @property
    def is_pending(self) -> bool:
        return self.status == MessageStatus.PENDING

    @property
    def is_failed(self) -> bool:
        return self.status == MessageStatus.ERROR
