from typing import Protocol

from tlvlink.core.models.message import ReceiveMessage, SendMessage


class Application(Protocol):
    """
    The per-connection handler executed by the Streamer.

    An Application is an asynchronous callable that receives two functions:
    `receive`, which waits for and returns the next incoming Message (or
    None once the peer has gone), and `send`, which frames and transmits a
    Message to the peer. It runs until it returns or raises; either way the
    connection is closed afterwards.

    The Application never sees raw bytes. Framing belongs to the Protocol
    and the Streamer.
    """
    async def __call__(self, receive: ReceiveMessage, send: SendMessage) -> None:
        ...
