from typing import Protocol, Any


class Serializer(Protocol):
    """
    Encodes structured payloads into bytes before they are framed.

    The codec only needs the payload length up front, so any serializer
    producing a complete byte string works. Implementations must be
    deterministic and must reject malformed input with an exception.
    """

    def serialize(self, obj: Any) -> bytes:
        """Encode a Python object into payload bytes."""

    def deserialize(self, data: bytes) -> Any:
        """Decode payload bytes back into a Python object."""
