from tlvlink.core.codec.framing import FrameCodec
from tlvlink.core.models.errors import CodecError, PayloadTooLarge
from tlvlink.core.models.message import Message


class FrameDecoder:
    """
    Incremental decoder for callback-driven transports.

    Bytes are fed as they arrive, in chunks of any size. Complete frames
    are returned as Message objects in arrival order, and a partial frame
    stays buffered until the rest of it is fed.

    A frame declaring a payload longer than `max_payload` is rejected as
    soon as its header is parsed, without waiting for the payload bytes.
    Frames completed earlier in the same chunk are still returned; the
    decoder is then `failed` and every later `feed()` raises the
    PayloadTooLarge it recorded. When nothing precedes the bad header in
    the chunk, `feed()` raises right away.
    """
    def __init__(self, codec: FrameCodec, max_payload: int | None = None) -> None:
        self._codec = codec
        self._max_payload = codec.max_payload if max_payload is None else max_payload
        self._buffer = bytearray()
        self._header: tuple[int, int] | None = None
        self._error: CodecError | None = None

    @property
    def pending(self) -> int:
        """Number of bytes buffered for the next, still incomplete, frame."""
        return len(self._buffer)

    @property
    def failed(self) -> bool:
        return self._error is not None

    @property
    def error(self) -> CodecError | None:
        return self._error

    def feed(self, data: bytes) -> list[Message]:
        if self._error is not None:
            raise self._error

        self._buffer.extend(data)
        messages: list[Message] = []
        header_width = self._codec.header_width

        while True:
            if self._header is None:
                if len(self._buffer) < header_width:
                    break

                message_type, length = self._codec.parse_header(self._buffer[:header_width])
                if length > self._max_payload:
                    self._error = PayloadTooLarge(length, self._max_payload)
                    if not messages:
                        raise self._error
                    break

                self._header = (message_type, length)
                del self._buffer[:header_width]

            message_type, length = self._header
            if len(self._buffer) < length:
                break

            payload = bytes(self._buffer[:length])
            del self._buffer[:length]
            self._header = None
            messages.append(Message(type=message_type, payload=payload))

        return messages
