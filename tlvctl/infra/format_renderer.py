import json
from typing import Any

import yaml

from tlvctl.core.ports.render import Renderer
from tlvlink.core.models.message import Message, MessageType
from tlvlink.core.ports.serializer import Serializer

# Replies whose payload is a serialized object rather than UTF-8 text.
STRUCTURED_TYPES = {MessageType.REGISTRATIONS}


class _MessageView:
    def __init__(self, serializer: Serializer) -> None:
        self._serializer = serializer

    def describe(self, message: Message) -> dict[str, Any]:
        try:
            type_name: int | str = MessageType(message.type).name
        except ValueError:
            type_name = message.type

        data: dict[str, Any] = {
            "type": type_name,
            "length": len(message.payload),
        }
        if message.payload:
            data["payload"] = self._payload(message)
        return data

    def _payload(self, message: Message) -> Any:
        if message.type in STRUCTURED_TYPES:
            return self._serializer.deserialize(message.payload)

        try:
            return message.text()
        except UnicodeDecodeError:
            return message.payload.hex(" ")


class JsonRenderer(_MessageView, Renderer):
    def render(self, message: Message) -> str:
        return json.dumps(self.describe(message), indent=2, ensure_ascii=False)


class YamlRenderer(_MessageView, Renderer):
    def render(self, message: Message) -> str:
        return yaml.safe_dump(self.describe(message), sort_keys=False, allow_unicode=True)
