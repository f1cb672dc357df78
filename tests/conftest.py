import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from miplaylist.main import app
from miplaylist.config import settings
from miplaylist.client.api import PlaylistClient
from miplaylist.client.controller import ViewController
from miplaylist.client.view import PageView

@pytest.fixture
def data_file(tmp_path, monkeypatch):
    # Every test gets its own playlist file
    path = tmp_path / "videos.json"
    monkeypatch.setattr(settings, "DATA_FILE", str(path))
    return path

@pytest.fixture
def client(data_file):
    with TestClient(app) as c:
        yield c

class FakeHandle:
    def __init__(self, delay, callback, args):
        self.delay = delay
        self.callback = callback
        self.args = args
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True

class FakeScheduler:
    """Records deferred callbacks instead of waiting for them."""

    def __init__(self):
        self.handles = []

    def call_later(self, delay, callback, *args):
        handle = FakeHandle(delay, callback, args)
        self.handles.append(handle)
        return handle

    def cancel_all(self):
        for handle in self.handles:
            handle.cancel()

    def due(self, delay=None):
        return [
            h for h in self.handles
            if not h.cancelled and not h.fired and (delay is None or h.delay == delay)
        ]

    def fire(self, delay=None):
        handles = self.due(delay)
        for handle in handles:
            handle.fired = True
            handle.callback(*handle.args)
        return len(handles)

@pytest.fixture
def scheduler():
    return FakeScheduler()

@pytest_asyncio.fixture
async def make_controller(scheduler):
    """Builds a bound controller whose HTTP traffic goes to ``handler``."""
    clients = []

    def factory(handler, confirm=None):
        requests = []

        def record(request):
            requests.append(request)
            return handler(request)

        api = PlaylistClient("http://testserver", transport=httpx.MockTransport(record))
        clients.append(api)
        view = PageView(confirm=confirm)
        controller = ViewController(view, api, scheduler=scheduler)
        controller.bind()
        return controller, view, requests

    yield factory

    for api in clients:
        await api.aclose()

@pytest_asyncio.fixture
async def live_api(data_file):
    """Client talking to the real app in-process."""
    async with PlaylistClient("http://testserver", transport=httpx.ASGITransport(app=app)) as api:
        yield api
