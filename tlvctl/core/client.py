import socket

from tlvlink.core.codec.framing import FrameCodec
from tlvlink.core.models.message import Message


class TlvClient:
    """
    Synchronous TCP client speaking type-length-value frames.

    Exchanges are strictly request/response: `request()` writes one frame
    and blocks until exactly one reply frame has been read. Reads go
    through an unbuffered socket file so that the codec never consumes
    bytes beyond the frame it is decoding.

    Transport failures such as ConnectionRefusedError or
    ConnectionResetError are raised to the caller unchanged; the client
    never retries. With `timeout=None` reads block until the reply arrives
    or the server closes the connection.
    """
    def __init__(
        self,
        host: str,
        port: int,
        codec: FrameCodec,
        timeout: float | None = None,
    ) -> None:
        self._host = host
        self._port = port
        self._codec = codec
        self._timeout = timeout
        self._sock: socket.socket | None = None
        self._stream = None

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def connect(self) -> None:
        if self._sock is not None:
            return

        self._sock = socket.create_connection((self._host, self._port), timeout=self._timeout)
        self._stream = self._sock.makefile("rb", buffering=0)

    def close(self) -> None:
        if self._sock:
            try:
                if self._stream is not None:
                    self._stream.close()
                self._sock.close()
            finally:
                self._sock = None
                self._stream = None

    def send(self, message: Message) -> None:
        # Encode first: a rejected message must not open or touch the connection.
        frame = self._codec.encode(message)

        if not self._sock:
            self.connect()

        self._sock.sendall(frame)

    def recv(self) -> Message:
        if not self._sock:
            self.connect()

        return self._codec.decode(self._stream)

    def request(self, message: Message) -> Message:
        self.send(message)
        return self.recv()

    def __enter__(self) -> "TlvClient":
        self.connect()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
