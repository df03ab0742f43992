import pytest

from tlvlink.core.models.errors import UnknownMessageType
from tlvlink.core.models.message import Message, MessageType
from tlvlink.core.routing.app import RoutedApplication
from tests.fake.fake_send_receive import FakeReceiveMessage, FakeSendMessage


def make_app():
    return RoutedApplication(error_type=MessageType.REGISTRATION_ERROR)


@pytest.mark.ut
@pytest.mark.asyncio
async def test_routed_application_dispatch():
    app = make_app()

    @app.request(7)
    async def handle_echo(message):
        return Message(type=8, payload=message.payload)

    receive = FakeReceiveMessage([
        Message(type=7, payload=b"one"),
        Message(type=7, payload=b"two"),
    ])
    send = FakeSendMessage()

    await app(receive, send)

    assert send.sent == [Message(type=8, payload=b"one"), Message(type=8, payload=b"two")]


@pytest.mark.ut
@pytest.mark.asyncio
async def test_routed_application_unknown_type_is_a_protocol_violation():
    app = make_app()

    receive = FakeReceiveMessage([Message(type=99)])
    send = FakeSendMessage()

    with pytest.raises(UnknownMessageType) as info:
        await app(receive, send)

    assert info.value.message_type == 99
    assert send.sent == []


@pytest.mark.ut
@pytest.mark.asyncio
async def test_routed_application_handler_exception():
    app = make_app()

    @app.request(1)
    async def handler_boom(message):
        raise ValueError("boom!")

    receive = FakeReceiveMessage([Message(type=1)])
    send = FakeSendMessage()

    await app(receive, send)

    assert send.sent == [Message.from_text(MessageType.REGISTRATION_ERROR, "boom!")]


@pytest.mark.ut
@pytest.mark.asyncio
async def test_routed_application_handler_returns_none():
    app = make_app()

    @app.request(1)
    async def handler_noop(message):
        return None

    receive = FakeReceiveMessage([Message(type=1)])
    send = FakeSendMessage()

    await app(receive, send)

    assert send.sent == [Message.from_text(3, "Empty response")]


@pytest.mark.ut
@pytest.mark.asyncio
async def test_routed_application_rejected_reply_becomes_error():
    app = make_app()

    @app.request(1)
    async def handler(message):
        return Message(type=2, payload=b"big")

    class RejectingSend(FakeSendMessage):
        async def __call__(self, msg):
            if msg.type == 2:
                raise ValueError("reply rejected")
            await super().__call__(msg)

    send = RejectingSend()
    await app(FakeReceiveMessage([Message(type=1)]), send)

    assert send.sent == [Message.from_text(3, "reply rejected")]
