import pytest

from chatlist.config import Settings
from chatlist.store import ChatEntityStore, ChatsState
from factories import FakeTransport


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        server_url="https://chat.example.test",
        project_id="project-1",
        username="bob",
        user_secret="secret",
        latest_chats_limit=2,
        search_heading_title="Conversations",
    )


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def store():
    return ChatEntityStore()


@pytest.fixture
def state(transport, settings):
    return ChatsState(transport, settings)
