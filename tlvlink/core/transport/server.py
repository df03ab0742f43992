import asyncio
import logging

from tlvlink.core.codec.framing import FrameCodec
from tlvlink.core.models.config import ServerConfig
from tlvlink.core.models.state import ServerState
from tlvlink.core.transport.protocol import Protocol


class MessageServer:
    """
    Owns the lifecycle of a TCP listener that accepts client connections,
    creates one Protocol per connection, and coordinates graceful shutdown.

    It binds the configured host and port through loop.create_server. Every
    Protocol shares the ServerState, which tracks active connections and the
    application tasks running for them, and the FrameCodec, which is
    stateless; per-connection stream state lives in the Protocol.

    The server implements no application logic. It wires the configured
    application callable and the codec into the transport so that incoming
    frames become Message objects handed to the application.

    On shutdown, MessageServer stops listening, closes every active
    connection, and waits for connections and tasks to finish. If the
    graceful shutdown timeout is exceeded, remaining tasks are cancelled.
    """
    def __init__(
        self,
        config: ServerConfig,
        codec: FrameCodec,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._config = config
        self._codec = codec
        self._loop = loop or asyncio.get_event_loop()
        self.state = ServerState()
        self._logger = logging.getLogger("core.transport.server")

        self._server: asyncio.AbstractServer | None = None

    @property
    def running(self) -> bool:
        return self._server is not None and self._server.is_serving()

    @property
    def address(self) -> tuple[str, int] | None:
        """The first bound (host, port), useful when binding port 0."""
        if not self._server or not self._server.sockets:
            return None
        sockname = self._server.sockets[0].getsockname()
        return sockname[0], sockname[1]

    def create_protocol(self) -> asyncio.Protocol:
        return Protocol(
            config=self._config,
            server_state=self.state,
            codec=self._codec,
            loop=self._loop
        )

    async def start(self) -> None:
        config = self._config

        self._server = await self._loop.create_server(
            self.create_protocol,
            host=config.host,
            port=config.port,
            backlog=config.backlog,
        )

        port = self.address[1] if self.address else config.port
        self._logger.info(
            f"Listening on {config.host}:{port} "
            f"(header {self._codec.header_width} bytes, max payload {self._codec.max_payload} bytes)"
        )

    async def shutdown(self) -> None:
        if self._server:
            self._server.close()

        for connection in self.state.connections.copy():
            connection.shutdown()

        try:
            await asyncio.wait_for(
                self._wait_task_complete(),
                timeout=self._config.timeout_graceful_shutdown
            )
        except asyncio.TimeoutError:
            self._logger.error(
                f"Cancel {len(self.state.tasks)} running task(s), "
                f"timeout graceful shutdown: {self.state.tasks}"
            )
            tasks = list(self.state.tasks)
            for task in tasks:
                task.cancel("Task cancelled, timeout graceful shutdown exceeded")

            await asyncio.gather(*tasks, return_exceptions=True)
            if self._server:
                await self._server.wait_closed()

    async def _wait_task_complete(self) -> None:
        if self.state.connections:
            self._logger.info("Waiting for client connections to close.")

        while self.state.connections:
            await asyncio.sleep(0.1)

        if self.state.tasks:
            self._logger.info("Waiting for application tasks to complete.")

        while self.state.tasks:
            await asyncio.sleep(0.1)

        if self._server:
            await self._server.wait_closed()
