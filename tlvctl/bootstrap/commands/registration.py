import argparse

from tlvctl.bootstrap.deps import get_cli
from tlvctl.core.client import TlvClient
from tlvlink.core.models.message import Message, MessageType

cli = get_cli()


@cli.command("register")
def register(client: TlvClient, namespace: argparse.Namespace) -> Message:
    name = getattr(namespace, "name", None)
    if not name:
        raise ValueError("name is required.")

    req = Message.from_text(MessageType.NEW_REGISTRATION, name)
    return client.request(req)


@cli.command("list")
def list_registrations(client: TlvClient, _: argparse.Namespace) -> Message:
    return client.request(Message(type=MessageType.LIST_REGISTRATIONS))
