import logging
from typing import Callable

from tlvlink.core.models.errors import UnknownMessageType
from tlvlink.core.models.message import Message, ReceiveMessage, SendMessage
from tlvlink.core.routing.router import Router, RouteHandler


class RoutedApplication:
    """
    Application that dispatches each incoming message to the handler
    registered for its type, strictly request/response: every request gets
    exactly one reply and nothing is ever sent unsolicited.

    - A type without a handler is a protocol violation. UnknownMessageType
      is raised, which ends the application and closes the connection.
    - The Message returned by the handler is sent back to the peer.
    - A handler returning None, raising, or returning a reply the codec
      rejects results in a single `error_type` reply carrying the error
      text.

    The application terminates when `receive()` returns None.
    """

    def __init__(self, error_type: int) -> None:
        self.router = Router()
        self._error_type = error_type
        self._logger = logging.getLogger("core.routing.app")

    async def __call__(self, receive: ReceiveMessage, send: SendMessage) -> None:
        while True:
            msg = await receive()
            if msg is None:
                break

            handler = self.router.resolve(msg.type)
            if handler is None:
                raise UnknownMessageType(msg.type)

            try:
                result = await handler(msg)
                if result is None:
                    result = Message.from_text(self._error_type, "Empty response")
                await send(result)
                self._logger.debug(f"Replied type={result.type} to type={msg.type}")
            except Exception as exc:
                self._logger.error(f"Error in handler for type {msg.type}: {exc}", exc_info=exc)
                await send(Message.from_text(self._error_type, str(exc)))

    def request(self, message_type: int) -> Callable[[RouteHandler], RouteHandler]:
        return self.router.request(message_type)
