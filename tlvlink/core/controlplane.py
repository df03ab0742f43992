import asyncio
import logging

from tlvlink.bootstrap.config.settings import TlvlinkConfig
from tlvlink.core.codec.framing import FrameCodec
from tlvlink.core.models.config import ServerConfig
from tlvlink.core.transport.application import Application
from tlvlink.core.transport.server import MessageServer


class ControlPlane:
    def __init__(
        self,
        config: TlvlinkConfig,
        app: Application,
        codec: FrameCodec,
    ) -> None:
        self._config = config
        self._app = app
        self._codec = codec
        self._loop = self._create_event_loop()
        self._logger = logging.getLogger("tlvlink.controlplane")

        self._server = MessageServer(
            config=self._build_server_config(),
            codec=self._codec,
            loop=self._loop,
        )

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    @property
    def server(self) -> MessageServer:
        return self._server

    async def start(self, stop_event: asyncio.Event) -> None:
        await self._server.start()
        await stop_event.wait()

        if self._server.running:
            self._logger.info("Shutting down server.")
            await self._server.shutdown()
        self._logger.info("Server stopped.")

    def _build_server_config(self) -> ServerConfig:
        server_config = self._config.server

        return ServerConfig(
            app=self._app,
            host=server_config.host,
            port=server_config.port,
            backlog=server_config.backlog,
            max_buffer_size=server_config.max_buffer_size,
            timeout_graceful_shutdown=server_config.timeout_graceful_shutdown,
        )

    @staticmethod
    def _create_event_loop() -> asyncio.AbstractEventLoop:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        return loop
