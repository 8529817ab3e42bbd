import pytest

from petitbac.config import Config
from petitbac.game import service
from petitbac.game.categories import CategorySource
from petitbac.game.registry import RoomRegistry
from petitbac.server import create_app


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    TRUST_PROXY_HEADERS = False
    SOCKETIO_ASYNC_MODE = "threading"
    CATEGORIES_FILE = ""


@pytest.fixture()
def registry():
    return RoomRegistry()


@pytest.fixture()
def category_source():
    return CategorySource()


@pytest.fixture()
def make_room(registry):
    """Room with an arbiter ``sid-a`` plus the given extra connection ids."""

    def _make(*others, categories=("Fruit", "Animal"), **settings):
        room = registry.create_room("sid-a", categories=list(categories), **settings)
        service.join(room, "sid-a", "Alice")
        for offset, sid in enumerate(others, start=1):
            player, _ = service.join(room, sid, sid.split("-")[-1].upper())
            # Distinct, ordered join times regardless of clock resolution.
            player.joined_at_ms = room.players["sid-a"].joined_at_ms + offset
        return room

    return _make


@pytest.fixture()
def socketio_app(registry, category_source):
    return create_app(TestConfig, registry=registry, category_source=category_source)


@pytest.fixture()
def flask_app(socketio_app):
    return socketio_app[0]


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def connect(socketio_app):
    app, socketio = socketio_app
    clients = []

    def _connect():
        test_client = socketio.test_client(app, flask_test_client=app.test_client())
        clients.append(test_client)
        return test_client

    yield _connect

    for test_client in clients:
        if test_client.is_connected():
            test_client.disconnect()


def payloads(received, name):
    return [pkt["args"][0] for pkt in received if pkt["name"] == name]


def names(received):
    return [pkt["name"] for pkt in received]
