import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tlvlink.core.transport.protocol import Protocol


@dataclass
class ServerState:
    """
    Shared runtime state for a MessageServer.

    This object is mutated by:
    - Protocol: adds/removes active connections and registers the task
      running the application for its connection
    - MessageServer.shutdown(): waits for connections and tasks to complete
    """
    connections: set["Protocol"] = field(default_factory=set)
    """
    Active Protocol instances, one per TCP connection.
    """

    tasks: set[asyncio.Task[None]] = field(default_factory=set)
    """
    Running application tasks. Each task removes itself on completion
    through task.add_done_callback(tasks.discard).
    """
