from functools import lru_cache

from tlvctl.core.cmd import TlvCmd
from tlvctl.infra.format_renderer import JsonRenderer, YamlRenderer
from tlvlink.infra.msgpack_serializer import MsgPackSerializer


@lru_cache
def get_cli() -> TlvCmd:
    serializer = MsgPackSerializer()
    renderers = {
        "yaml": YamlRenderer(serializer),
        "json": JsonRenderer(serializer),
    }
    return TlvCmd(renderers)
