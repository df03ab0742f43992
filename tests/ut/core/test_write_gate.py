import asyncio
import pytest

from tlvlink.core.transport.flow import WriteGate


@pytest.mark.ut
@pytest.mark.asyncio
async def test_initially_writable():
    gate = WriteGate()

    assert gate.paused is False
    await gate.wait_writable()


@pytest.mark.ut
@pytest.mark.asyncio
async def test_pause_and_resume():
    gate = WriteGate()

    gate.pause()
    assert gate.paused is True

    gate.resume()
    assert gate.paused is False


@pytest.mark.ut
@pytest.mark.asyncio
async def test_wait_blocks_until_resume():
    gate = WriteGate()
    gate.pause()

    results = []

    async def writer(i):
        await gate.wait_writable()
        results.append(i)

    tasks = [asyncio.create_task(writer(i)) for i in range(3)]
    await asyncio.sleep(0)
    assert results == []

    gate.resume()
    await asyncio.gather(*tasks)

    assert results == [0, 1, 2]
