import asyncio
import struct
from typing import Protocol

from tlvlink.core.models.errors import PayloadTooLarge, UnexpectedEndOfStream
from tlvlink.core.models.message import Message

# Unsigned big-endian (network order) field formats by width in bytes.
FIELD_FORMATS = {1: "B", 2: "H", 4: "I"}


class ReadableStream(Protocol):
    def read(self, size: int, /) -> bytes:
        ...


class FrameCodec:
    """
    Type-length-value framing of Message objects over a byte stream.

    Every frame is a fixed-width header followed by the payload:

        [type: type_width bytes][length: length_width bytes][payload]

    Both header fields are unsigned big-endian integers. Because the
    header has a constant size, a reader always knows how many bytes to
    read next: first the header, then exactly `length` payload bytes.
    The decoder never scans for a delimiter and never reads beyond the
    end of the current frame, so whatever follows in the stream stays
    available for the next decode.

    The widths are a protocol parameter and must match on both ends of
    a connection. With the default single-byte length field a payload
    holds at most 255 bytes.

    The codec does not interpret `type`; it is surfaced unmodified so
    that dispatch logic can recognise or reject it.
    """
    def __init__(self, length_width: int = 1, type_width: int = 1) -> None:
        if length_width not in FIELD_FORMATS:
            raise ValueError(
                f"length_width must be one of {sorted(FIELD_FORMATS)}, got {length_width}"
            )
        if type_width not in (1, 2):
            raise ValueError(f"type_width must be 1 or 2, got {type_width}")

        self.length_width = length_width
        self.type_width = type_width
        self._header = struct.Struct(
            "!" + FIELD_FORMATS[type_width] + FIELD_FORMATS[length_width]
        )

    @property
    def header_width(self) -> int:
        return self._header.size

    @property
    def max_payload(self) -> int:
        """Largest payload length the length field can represent."""
        return (1 << (8 * self.length_width)) - 1

    @property
    def max_type(self) -> int:
        return (1 << (8 * self.type_width)) - 1

    def encode(self, message: Message) -> bytes:
        """
        Encode a message into exactly `header_width + len(payload)` bytes.

        Raises PayloadTooLarge if the payload cannot be described by the
        length field, and ValueError if the type does not fit its field.
        """
        if not 0 <= message.type <= self.max_type:
            raise ValueError(
                f"Message type must be in 0..{self.max_type}, got {message.type}"
            )

        size = len(message.payload)
        if size > self.max_payload:
            raise PayloadTooLarge(size, self.max_payload)

        return self._header.pack(message.type, size) + bytes(message.payload)

    def parse_header(self, header: bytes | bytearray) -> tuple[int, int]:
        """Return `(type, length)` from exactly `header_width` bytes."""
        return self._header.unpack(header)

    def decode(self, stream: ReadableStream) -> Message:
        """
        Blocking read of one whole message from a binary stream.

        The stream only needs a `read(size)` method that returns at most
        `size` bytes and an empty bytes object at end of stream, such as
        a file, an io.BytesIO or an unbuffered socket file.
        """
        header = self._read_exact(stream, self.header_width)
        message_type, length = self.parse_header(header)

        payload = b""
        if length:
            payload = self._read_exact(stream, length, offset=self.header_width)

        return Message(type=message_type, payload=payload)

    async def read(self, reader: asyncio.StreamReader) -> Message:
        """Read one whole message from an asyncio stream."""
        try:
            header = await reader.readexactly(self.header_width)
        except asyncio.IncompleteReadError as ex:
            raise UnexpectedEndOfStream(self.header_width, len(ex.partial)) from ex

        message_type, length = self.parse_header(header)

        try:
            payload = await reader.readexactly(length) if length else b""
        except asyncio.IncompleteReadError as ex:
            raise UnexpectedEndOfStream(
                self.header_width + length,
                self.header_width + len(ex.partial)
            ) from ex

        return Message(type=message_type, payload=payload)

    @staticmethod
    def _read_exact(stream: ReadableStream, n: int, offset: int = 0) -> bytes:
        buf = bytearray()
        while len(buf) < n:
            chunk = stream.read(n - len(buf))
            if not chunk:
                raise UnexpectedEndOfStream(offset + n, offset + len(buf))
            buf.extend(chunk)
        return bytes(buf)
