import asyncio
import logging

from tlvlink.core.codec.decoder import FrameDecoder
from tlvlink.core.codec.framing import FrameCodec
from tlvlink.core.models.config import ServerConfig
from tlvlink.core.models.errors import CodecError
from tlvlink.core.models.state import ServerState
from tlvlink.core.transport.addr import format_addr, get_local_addr, get_remote_addr
from tlvlink.core.transport.flow import WriteGate
from tlvlink.core.transport.stream import Streamer


class Protocol(asyncio.Protocol):
    """
    Implements framing and connection lifecycle for a single TCP client.

    Each accepted connection gets its own Protocol, FrameDecoder and
    Streamer; nothing that holds stream state is shared between
    connections. Raw bytes from the transport are fed to the decoder,
    which returns whole messages once their header and full payload have
    arrived. Decoded messages are pushed onto the Streamer's queue, where
    the application task picks them up.

    A frame declaring a payload larger than the configured receive buffer
    closes the connection immediately, as does a buffer that grows past
    that limit.

    When the connection is lost, Protocol removes itself from the server
    state, releases any writer blocked on backpressure and pushes a None
    sentinel so the application sees the end of the stream.
    """
    def __init__(
        self,
        config: ServerConfig,
        server_state: ServerState,
        codec: FrameCodec,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._transport: asyncio.Transport = None   # type: ignore[assignment]
        self._gate: WriteGate = None  # type: ignore[assignment]
        self._streamer: Streamer = None   # type: ignore[assignment]

        self._config = config
        self._app = config.app
        self._loop = loop or asyncio.get_event_loop()
        self._connections = server_state.connections
        self._tasks = server_state.tasks
        self._codec = codec
        self._decoder = FrameDecoder(
            codec,
            max_payload=min(codec.max_payload, config.max_buffer_size)
        )
        self._peer = "?"
        self._logger = logging.getLogger("core.transport.protocol")

    def connection_made(self, transport: asyncio.Transport) -> None:  # type: ignore[override]
        self._transport = transport
        self._gate = WriteGate()
        self._connections.add(self)
        self._peer = format_addr(get_remote_addr(transport))
        self._streamer = Streamer(
            transport=self._transport,
            gate=self._gate,
            codec=self._codec,
            queue=asyncio.Queue(),
            peer=self._peer,
        )
        task = self._loop.create_task(self._streamer.run_app(self._app))
        task.add_done_callback(self._tasks.discard)
        self._tasks.add(task)

        self._logger.info(
            f"{self._peer} - Client connected on {format_addr(get_local_addr(transport))}"
        )

    def connection_lost(self, exc: Exception | None) -> None:
        self._connections.discard(self)

        if exc is None:
            self._logger.info(f"{self._peer} - Connection closed")
        else:
            self._logger.warning(f"{self._peer} - Connection lost: {exc}")

        if self._gate is not None:
            self._gate.resume()
        if exc is None:
            self._transport.close()

        self._streamer.queue.put_nowait(None)

    def eof_received(self) -> bool | None:
        # Let the transport close itself; connection_lost follows.
        return None

    def data_received(self, data: bytes) -> None:
        try:
            messages = self._decoder.feed(data)
        except CodecError as exc:
            self._logger.warning(f"{self._peer} - {exc}, closing connection")
            self._transport.close()
            return

        if self._decoder.pending > self._config.max_buffer_size:
            self._logger.warning(f"{self._peer} - Buffer overflow, closing connection")
            self._transport.close()
            return

        for message in messages:
            self._logger.debug(
                f"{self._peer} - Received message type={message.type} "
                f"length={len(message.payload)}"
            )
            self._streamer.queue.put_nowait(message)

        if self._decoder.failed:
            # Answer what was already decoded, then let the application end the connection.
            self._logger.warning(f"{self._peer} - {self._decoder.error}, closing connection")
            self._transport.pause_reading()
            self._streamer.queue.put_nowait(None)

    def pause_writing(self) -> None:
        self._gate.pause()

    def resume_writing(self) -> None:
        self._gate.resume()

    def shutdown(self) -> None:
        self._transport.close()
