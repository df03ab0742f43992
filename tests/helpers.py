import asyncio
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, YamlConfigSettingsSource

from tlvlink.bootstrap.config.settings import TlvlinkConfig
from tlvlink.core.codec.framing import FrameCodec
from tlvlink.core.models.config import ServerConfig
from tlvlink.core.transport.application import Application
from tlvlink.core.transport.server import MessageServer


class FakeTlvlinkConfig(TlvlinkConfig):
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=os.environ["TEST_TLVLINKCONFIG"]),
        )


@asynccontextmanager
async def running_server(
    app: Application,
    codec: FrameCodec,
    **overrides,
) -> AsyncIterator[MessageServer]:
    options = {
        "host": "127.0.0.1",
        "port": 0,
        "backlog": 10,
        "max_buffer_size": 1024,
        "timeout_graceful_shutdown": 1.0,
    }
    options.update(overrides)
    config = ServerConfig(app=app, **options)

    server = MessageServer(config=config, codec=codec, loop=asyncio.get_running_loop())
    await server.start()
    try:
        yield server
    finally:
        await server.shutdown()
