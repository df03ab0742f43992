from typing import Protocol

from tlvlink.core.models.message import Message


class Renderer(Protocol):
    def render(self, message: Message) -> str:
        ...
