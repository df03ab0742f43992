import asyncio
import pytest
from unittest.mock import Mock, AsyncMock

from tlvlink.core.models.errors import PayloadTooLarge, UnknownMessageType
from tlvlink.core.models.message import Message
from tlvlink.core.transport.flow import WriteGate
from tlvlink.core.transport.stream import Streamer


def open_gate():
    gate = Mock(spec=WriteGate)
    gate.paused = False
    gate.wait_writable = AsyncMock(return_value=None)
    return gate


@pytest.mark.ut
@pytest.mark.asyncio
async def test_send_writes_frame_to_transport(transport, codec):
    streamer = Streamer(transport, open_gate(), codec, asyncio.Queue())

    await streamer.send(Message.from_text(3, "taken"))

    assert transport.buffer == bytes([3, 5]) + b"taken"
    assert not transport.is_closing()


@pytest.mark.ut
@pytest.mark.asyncio
async def test_send_waits_for_write_gate(transport, codec):
    gate = Mock(spec=WriteGate)
    gate.paused = True

    async def unblock():
        gate.paused = False

    gate.wait_writable = AsyncMock(side_effect=unblock)

    streamer = Streamer(transport, gate, codec, asyncio.Queue())
    await streamer.send(Message(type=2))

    gate.wait_writable.assert_awaited_once()
    assert transport.buffer == bytes([2, 0])


@pytest.mark.ut
@pytest.mark.asyncio
async def test_send_rejects_oversized_payload_before_writing(transport, codec):
    streamer = Streamer(transport, open_gate(), codec, asyncio.Queue())

    with pytest.raises(PayloadTooLarge):
        await streamer.send(Message(type=3, payload=b"x" * 256))

    assert transport.buffer == b""
    assert not transport.is_closing()


@pytest.mark.ut
@pytest.mark.asyncio
async def test_send_on_closing_transport_is_dropped(transport, codec):
    streamer = Streamer(transport, open_gate(), codec, asyncio.Queue())
    transport.close()

    await streamer.send(Message(type=2))

    assert transport.buffer == b""


@pytest.mark.ut
@pytest.mark.asyncio
async def test_receive_returns_next_message(transport, codec):
    queue = asyncio.Queue()
    streamer = Streamer(transport, open_gate(), codec, queue)

    msg = Message.from_text(1, "mart")
    await queue.put(msg)

    assert await streamer.receive() == msg


@pytest.mark.ut
@pytest.mark.asyncio
async def test_run_app_closes_transport_on_normal_exit(transport, codec):
    async def app(receive, send):
        return

    streamer = Streamer(transport, open_gate(), codec, asyncio.Queue())
    await streamer.run_app(app)

    assert transport.is_closing()


@pytest.mark.ut
@pytest.mark.asyncio
async def test_run_app_closes_transport_on_exception(transport, codec):
    async def app(receive, send):
        raise RuntimeError("boom")

    streamer = Streamer(transport, open_gate(), codec, asyncio.Queue())
    await streamer.run_app(app)

    assert transport.is_closing()


@pytest.mark.ut
@pytest.mark.asyncio
async def test_run_app_closes_transport_on_protocol_violation(transport, codec):
    async def app(receive, send):
        raise UnknownMessageType(99)

    streamer = Streamer(transport, open_gate(), codec, asyncio.Queue())
    await streamer.run_app(app)

    assert transport.is_closing()
    assert transport.buffer == b""
