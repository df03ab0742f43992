import argparse
import functools
from typing import Protocol

from tlvctl.core.client import TlvClient
from tlvlink.core.models.message import Message


class CommandHandler(Protocol):
    def __call__(
        self,
        client: TlvClient,
        namespace: argparse.Namespace,
    ) -> Message:
        ...


class CommandDispatcher:
    def __init__(self) -> None:
        self._commands: dict[tuple[str, ...], CommandHandler] = {}

    def dispatch(
        self,
        *arguments: str,
        client: TlvClient,
        namespace: argparse.Namespace
    ) -> Message:
        command = self._commands.get(arguments)
        if command is None:
            raise RuntimeError(f"Unknown '{' '.join(arguments)}' command")
        return command(client, namespace)

    def command(self, *arguments: str):
        def decorator(func: CommandHandler):

            @functools.wraps(func)
            def wrapper(client: TlvClient, namespace: argparse.Namespace) -> Message:
                return func(client, namespace)

            self._commands[arguments] = wrapper

            return wrapper

        return decorator
