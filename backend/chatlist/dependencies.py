"""Factories wiring the state container to its collaborators."""

from chatlist.config import get_settings
from chatlist.services.chatengine import ChatEngineClient, ChatTransport
from chatlist.store import ChatsState


def get_chat_client() -> ChatEngineClient:
    """Get a backend client configured from settings."""
    settings = get_settings()
    return ChatEngineClient(
        server_url=settings.server_url,
        project_id=settings.project_id,
        username=settings.username,
        user_secret=settings.user_secret,
        timeout=settings.request_timeout,
    )


def create_chats_state(transport: ChatTransport | None = None) -> ChatsState:
    """Create a conversation list state bound to ``transport`` (default: backend client)."""
    settings = get_settings()
    return ChatsState(transport or get_chat_client(), settings)
