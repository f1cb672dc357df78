import asyncio

import pytest

from miplaylist.client.scheduler import Scheduler

@pytest.mark.asyncio
async def test_call_later_fires_once():
    scheduler = Scheduler()
    fired = []

    scheduler.call_later(0.01, fired.append, "a")
    assert scheduler.pending == 1

    await asyncio.sleep(0.05)
    assert fired == ["a"]
    assert scheduler.pending == 0

@pytest.mark.asyncio
async def test_cancel_all():
    scheduler = Scheduler()
    fired = []

    scheduler.call_later(0.01, fired.append, "a")
    scheduler.call_later(0.02, fired.append, "b")
    scheduler.cancel_all()

    await asyncio.sleep(0.05)
    assert fired == []
    assert scheduler.pending == 0
