"""Exception hierarchy shared by the client and the relay.

Server side, ValidationError maps to 400 and ProviderError to 500.
Client side, RelayError subclasses turn the pending reply into an error.
"""


class RelayChatError(Exception):
    """Base class for all relaychat errors."""


class ValidationError(RelayChatError):
    """A prompt was missing, empty or whitespace-only."""

    def __init__(self, message: str = "Prompt is required") -> None:
        super().__init__(message)


class ProviderError(RelayChatError):
    """Calling the completion provider or reading its response failed."""


class ProviderFormatError(ProviderError):
    """The provider response carried a value of an unexpected type.

    Raised when a known text accessor exists but yields something other
    than a string, so a change in the provider format is reported instead
    of being papered over with a placeholder reply.
    """


class RelayError(RelayChatError):
    """The relay call from the client could not complete successfully."""


class NetworkError(RelayError):
    """The request never produced an HTTP response."""


class TransportError(RelayError):
    """The relay answered with a non-success status or an unreadable body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConversationError(RelayChatError):
    """Invalid operation on the conversation store."""


class UnknownMessageError(ConversationError, KeyError):
    """No message with the given id exists."""

    def __init__(self, message_id: int) -> None:
        super().__init__(f"Unknown message id: {message_id}")
        self.message_id = message_id

    def __str__(self) -> str:
        return self.args[0]


class InvalidTransitionError(ConversationError):
    """The message cannot move to the requested status."""
