from dataclasses import dataclass

from tlvlink.core.transport.application import Application


@dataclass
class ServerConfig:
    """
    Static configuration for a MessageServer: networking, resource limits
    and graceful shutdown behavior.
    """
    app: Application
    """
    The application coroutine with the signature:
        async def app(receive, send)
    One instance serves every connection; each call handles one connection.
    """

    host: str
    """
    Address to bind. "0.0.0.0" (or "::") listens on all local addresses.
    """

    port: int
    """
    TCP port to bind. If set to 0, the OS selects an available port.
    Ports below 1025 usually require elevated privileges.
    """

    backlog: int = 128
    """
    Maximum number of pending TCP connections waiting for accept().
    """

    max_buffer_size: int = 64 * 1024
    """
    Maximum number of bytes buffered for a single incomplete frame.
    A frame declaring a larger payload closes the connection.
    """

    timeout_graceful_shutdown: float = 5.0
    """
    Maximum time (in seconds) allowed for graceful shutdown. After this
    timeout, handler tasks still running are cancelled.
    """
