import asyncio
import logging

from tlvlink.core.codec.framing import FrameCodec
from tlvlink.core.models.errors import CodecError
from tlvlink.core.models.message import Message
from tlvlink.core.transport.application import Application
from tlvlink.core.transport.flow import WriteGate


class Streamer:
    """
    Manages the bidirectional flow of messages for a single TCP connection.

    It receives decoded Message objects from the Protocol through an internal
    queue and exposes them to the Application via `receive()`. When the
    Application sends a response, the Streamer encodes the Message with the
    connection's FrameCodec and writes the frame to the transport.

    Encoding happens before anything is written: a message the codec
    rejects (PayloadTooLarge, a type that does not fit its field) raises to
    the Application and leaves the stream untouched. Writes wait on the
    WriteGate while the transport is paused.

    `run_app()` executes the Application for the lifetime of the connection.
    When the Application returns or raises, the transport is closed.
    """
    def __init__(
        self,
        transport: asyncio.Transport,
        gate: WriteGate,
        codec: FrameCodec,
        queue: asyncio.Queue[Message | None],
        peer: str = "?",
    ) -> None:
        self.queue = queue
        self._transport = transport
        self._gate = gate
        self._codec = codec
        self._peer = peer
        self._logger = logging.getLogger("core.transport.stream")

    async def send(self, message: Message) -> None:
        frame = self._codec.encode(message)

        if self._gate.paused:
            await self._gate.wait_writable()

        if self._transport.is_closing():
            self._logger.warning(f"{self._peer} - Connection closing, dropped message type={message.type}")
            return

        try:
            self._transport.write(frame)
        except Exception as exc:
            self._logger.error(f"{self._peer} - Failed to send message: {exc}")
            self._transport.close()

    async def receive(self) -> Message | None:
        return await self.queue.get()

    async def run_app(self, app: Application) -> None:
        try:
            await app(self.receive, self.send)
        except CodecError as exc:
            self._logger.warning(f"{self._peer} - Protocol violation, closing connection: {exc}")
        except Exception as exc:
            self._logger.error(f"{self._peer} - Exception in Application", exc_info=exc)
        finally:
            self._transport.close()
