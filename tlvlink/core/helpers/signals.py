import asyncio
import logging
import signal
import sys
import threading
from types import FrameType, TracebackType

SHUTDOWN_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)

if sys.platform == "win32":
    SHUTDOWN_SIGNALS += (signal.SIGBREAK,)


class ShutdownSignals:
    """
    Context manager turning shutdown signals into an asyncio.Event.

    While active, SIGINT and SIGTERM only set the stop event, so the
    control plane can drain connections before the process exits. On
    exit the previous handlers are restored and each signal caught in
    between is raised again, once, for them to act on.

    Handlers can only be installed from the main thread; elsewhere the
    event is returned untouched and signals keep their usual behaviour.
    """
    def __init__(self, signals: tuple[int, ...] = SHUTDOWN_SIGNALS) -> None:
        self.stop_event = asyncio.Event()
        self.received: list[int] = []
        self._signals = signals
        self._previous: dict[int, signal.Handlers | int | None] = {}
        self._logger = logging.getLogger("core.helpers.signals")

    def __enter__(self) -> asyncio.Event:
        if threading.current_thread() is threading.main_thread():
            for sig in self._signals:
                self._previous[sig] = signal.signal(sig, self._handle)
        return self.stop_event

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        previous, self._previous = self._previous, {}
        for sig, handler in previous.items():
            if handler is not None:
                signal.signal(sig, handler)

        for sig in dict.fromkeys(self.received):
            if sig in previous:
                signal.raise_signal(sig)

    def _handle(self, signum: int, frame: FrameType | None) -> None:
        if not self.received:
            self._logger.info(f"Received {signal.Signals(signum).name}, stopping.")
        self.received.append(signum)
        self.stop_event.set()
