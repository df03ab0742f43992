class CodecError(Exception):
    """Base class for every framing failure raised by the codec."""


class PayloadTooLarge(CodecError):
    """
    The payload does not fit in the length field. Raised by the encoder
    before a single byte is produced.
    """
    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Payload too large: {size} > {limit} bytes")
        self.size = size
        self.limit = limit


class UnexpectedEndOfStream(CodecError):
    """
    The peer closed the stream before a complete header or payload
    was received.
    """
    def __init__(self, expected: int, received: int) -> None:
        super().__init__(
            f"Stream closed after {received} of {expected} expected bytes"
        )
        self.expected = expected
        self.received = received


class UnknownMessageType(CodecError):
    """Raised by dispatch logic for a type no handler is registered for."""
    def __init__(self, message_type: int) -> None:
        super().__init__(f"Unknown message type {message_type}")
        self.message_type = message_type
