import asyncio


def _as_addr(value) -> tuple[str, int] | None:
    if isinstance(value, (list, tuple)) and len(value) >= 2:
        return str(value[0]), int(value[1])
    return None


def get_remote_addr(transport: asyncio.BaseTransport) -> tuple[str, int] | None:
    """Return the (host, port) of the peer, or None if it cannot be resolved."""
    sock = transport.get_extra_info("socket")
    if sock is not None:
        try:
            return _as_addr(sock.getpeername())
        except OSError:
            return None

    return _as_addr(transport.get_extra_info("peername"))


def get_local_addr(transport: asyncio.BaseTransport) -> tuple[str, int] | None:
    """Return the local (host, port) of the connection, or None."""
    sock = transport.get_extra_info("socket")
    if sock is not None:
        try:
            return _as_addr(sock.getsockname())
        except OSError:
            return None

    return _as_addr(transport.get_extra_info("sockname"))


def format_addr(addr: tuple[str, int] | None) -> str:
    if addr is None:
        return "?"
    host, port = addr
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"
