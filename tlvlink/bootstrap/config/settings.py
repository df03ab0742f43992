from typing import Annotated, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from tlvlink.bootstrap.config.loader import get_configfile
from tlvlink.core.codec.framing import FrameCodec


class ServerSettings(BaseModel):
    host: Annotated[
        str,
        Field(
            description=(
                "Bind address for the server.\n"
                "'0.0.0.0' listens on every local IPv4 address, '::' on IPv6."
            ),
            default="0.0.0.0"
        )
    ]

    port: Annotated[
        int,
        Field(
            description=(
                "TCP port to listen on. 0 lets the OS pick a free port.\n"
                "Ports 1-1024 require elevated privileges on most systems."
            ),
            default=8080,
            ge=0,
            le=65535
        )
    ]

    backlog: Annotated[
        int,
        Field(
            description="Maximum number of pending TCP connections.",
            default=128,
            gt=0
        )
    ]

    timeout_graceful_shutdown: Annotated[
        float,
        Field(
            description="Maximum time allowed for graceful shutdown.",
            default=5.0,
            ge=0
        )
    ]

    max_buffer_size: Annotated[
        int,
        Field(
            description=(
                "Maximum number of bytes buffered for one incoming frame.\n"
                "Frames declaring a larger payload close the connection."
            ),
            default=64 * 1024,
            gt=0
        )
    ]


class ProtocolSettings(BaseModel):
    length_width: Annotated[
        Literal[1, 2, 4],
        Field(
            description=(
                "Width in bytes of the payload length field.\n"
                "1 → payloads up to 255 bytes, 2 → 65535, 4 → 4294967295.\n"
                "Clients and server must agree on this value."
            ),
            default=1
        )
    ]

    type_width: Annotated[
        Literal[1, 2],
        Field(
            description="Width in bytes of the message type field.",
            default=1
        )
    ]


class TlvlinkConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TLVLINK_",
        env_nested_delimiter="__",
        extra="ignore"
    )

    server: Annotated[
        ServerSettings,
        Field(
            description=(
                "Listener configuration.\n"
                "Controls where the server accepts connections and the runtime\n"
                "limits applied to each of them."
            ),
            default_factory=ServerSettings
        )
    ]

    protocol: Annotated[
        ProtocolSettings,
        Field(
            description=(
                "Framing parameters.\n"
                "Fixed per deployment; every peer must use the same widths."
            ),
            default_factory=ProtocolSettings
        )
    ]

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
            YamlConfigSettingsSource(settings_cls, yaml_file=get_configfile()),
        )

    def build_codec(self) -> FrameCodec:
        return FrameCodec(
            length_width=self.protocol.length_width,
            type_width=self.protocol.type_width
        )
