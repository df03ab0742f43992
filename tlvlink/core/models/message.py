from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Awaitable


class MessageType(IntEnum):
    """Message types of the registration exchange."""

    NEW_REGISTRATION = 1
    REGISTRATION_OK = 2
    REGISTRATION_ERROR = 3
    LIST_REGISTRATIONS = 4
    REGISTRATIONS = 5


@dataclass(frozen=True)
class Message:
    """
    A discrete unit of application data exchanged over a connection.
    The codec turns it into a type-length-value frame and back; the
    payload itself is opaque to the transport.
    """
    type: int
    """
    Small unsigned integer identifying the semantic kind of the message.
    """

    payload: bytes = b""
    """
    Raw payload bytes, possibly empty. Interpretation depends on `type`.
    """

    @classmethod
    def from_text(cls, type: int, text: str) -> "Message":
        return cls(type=type, payload=text.encode("utf-8"))

    def text(self) -> str:
        """Decode the payload as UTF-8."""
        return self.payload.decode("utf-8")


ReceiveMessage = Callable[[], Awaitable[Message | None]]
"""
Coroutine provided to the application for receiving a message.
It suspends until a message is available and returns None once the
connection is gone.
"""


SendMessage = Callable[[Message], Awaitable[None]]
"""
Coroutine provided to the application for sending a message to the client.
"""
