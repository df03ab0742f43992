import asyncio
import logging

from tlvlink.core.models.message import Message, MessageType
from tlvlink.core.ports.serializer import Serializer


class RegistrationService:
    """
    In-memory registry of names, serving the registration exchange.

    A NEW_REGISTRATION request carries a UTF-8 name. The name is accepted
    with an empty REGISTRATION_OK reply, or refused with a
    REGISTRATION_ERROR reply whose payload is the UTF-8 reason. Names are
    compared after stripping surrounding whitespace and are kept for the
    lifetime of the process.
    """

    def __init__(self, serializer: Serializer) -> None:
        self._serializer = serializer
        self._names: list[str] = []
        self._lock = asyncio.Lock()
        self._logger = logging.getLogger("core.service.registration")

    @property
    def names(self) -> list[str]:
        return list(self._names)

    async def register(self, request: Message) -> Message:
        try:
            name = request.text().strip()
        except UnicodeDecodeError:
            return self._error("Name must be valid UTF-8.")

        if not name:
            return self._error("Name cannot be empty.")

        async with self._lock:
            if name in self._names:
                return self._error(f"Name '{name}' is already registered.")
            self._names.append(name)

        self._logger.info(f"Registered '{name}'")
        return Message(type=MessageType.REGISTRATION_OK)

    async def list_names(self, _: Message) -> Message:
        payload = self._serializer.serialize(self.names)
        return Message(type=MessageType.REGISTRATIONS, payload=payload)

    def _error(self, reason: str) -> Message:
        self._logger.info(f"Registration refused: {reason}")
        return Message.from_text(MessageType.REGISTRATION_ERROR, reason)
