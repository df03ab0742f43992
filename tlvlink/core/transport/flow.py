import asyncio


class WriteGate:
    """
    Tracks whether an asyncio transport accepts more outgoing data.

    The Protocol closes the gate when the transport reports its write
    buffer above the high-water mark and opens it again once the buffer
    has drained. Writers await `wait_writable()` before writing so that
    a slow reader applies backpressure to the application.
    """

    def __init__(self) -> None:
        self._open = asyncio.Event()
        self._open.set()

    @property
    def paused(self) -> bool:
        return not self._open.is_set()

    async def wait_writable(self) -> None:
        """Return once the transport is writable."""
        await self._open.wait()

    def pause(self) -> None:
        self._open.clear()

    def resume(self) -> None:
        self._open.set()
