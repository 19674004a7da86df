"""Conversation list state container."""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from chatlist.config import Settings, get_settings
from chatlist.errors import NetworkFailure
from chatlist.models.domain import Chat, ChatMessage, Message, MessageEntities
from chatlist.services.chatengine import ChatTransport
from chatlist.store import projector
from chatlist.store.entities import ChatEntityStore
from chatlist.store.search import SearchListItem, SearchOverlay

logger = logging.getLogger(__name__)

SelectionListener = Callable[[int], None]


class ChatsState:
    """
    Client-side view of the user's conversations.

    Combines the normalized entity store, the search overlay, the selected
    chat and the draft title of a chat to create. Every transition is an
    explicit method call; derived views are recomputed on read.

    Features:
    - Full and latest-page chat loads from the backend
    - Message add/edit/latest-pointer updates
    - Backend search overriding the displayed list
    - Selection with listener notification
    """

    def __init__(
        self,
        transport: ChatTransport,
        settings: Settings | None = None,
        username: str | None = None,
    ):
        self._settings = settings or get_settings()
        self._username = username or self._settings.username
        self._transport = transport
        self._store = ChatEntityStore()
        self._overlay = SearchOverlay(transport, self._settings.search_heading_title)
        self._selected_chat_id: int | None = None
        self._new_chat_title = ""
        self._selection_listeners: list[SelectionListener] = []

    @property
    def store(self) -> ChatEntityStore:
        return self._store

    @property
    def overlay(self) -> SearchOverlay:
        return self._overlay

    @property
    def new_chat_title(self) -> str:
        return self._new_chat_title

    def on_input(self, text: str) -> None:
        """Record the title typed for a new chat."""
        self._new_chat_title = text

    async def create_new_chat(self) -> Chat | None:
        """
        Create a chat with the drafted title.

        Returns:
            The created chat, or None when no title was drafted

        Raises:
            NetworkFailure: If the backend rejects the request; the draft is kept
        """
        if not self._new_chat_title:
            return None

        try:
            raw_chat = await self._transport.create_chat(self._new_chat_title)
        except NetworkFailure as e:
            logger.error(f"Failed to create chat {self._new_chat_title!r}: {e.message}")
            raise

        logger.info(f"Created chat {raw_chat.get('id')} titled {self._new_chat_title!r}")
        self._new_chat_title = ""
        return Chat.from_dict(raw_chat)

    @property
    def selected_chat_id(self) -> int | None:
        return self._selected_chat_id

    def on_chat_selected(self, listener: SelectionListener) -> None:
        """Register a callback run with the chat id on every selection."""
        self._selection_listeners.append(listener)

    def select_chat(self, chat_id: int) -> None:
        """Select a chat and ask listeners to load its messages."""
        self._selected_chat_id = chat_id
        for listener in self._selection_listeners:
            listener(chat_id)

    async def get_chats(self) -> None:
        """Fetch every chat and replace the store with it."""
        raw_chats = await self._transport.fetch_chats()
        self._store.load_chats(raw_chats)

    async def get_latest_chats(self, limit: int | None = None) -> None:
        """Fetch the most recent chats and merge them into the store."""
        if limit is None:
            limit = self._settings.latest_chats_limit
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        raw_chats = await self._transport.fetch_latest_chats(limit)
        self._store.load_latest_chats(raw_chats)

    def update_chat(self, partial: Mapping[str, Any]) -> None:
        self._store.update_chat(partial)

    def set_message_entities(self, chat_id: int, message_entities: MessageEntities) -> None:
        self._store.set_message_entities(chat_id, message_entities)

    def add_message(self, chat_id: int, message: Message) -> None:
        self._store.add_message(chat_id, message)

    def edit_message(self, chat_id: int, message: Message) -> None:
        self._store.edit_message(chat_id, message)

    def set_last_message(self, chat_id: int, message: Message) -> None:
        self._store.set_last_message(chat_id, message)

    async def search_chats(self, text: str) -> list[SearchListItem]:
        """Search chats visible to the current user."""
        return await self._overlay.search(text, self._username)

    def off_search_chats(self) -> None:
        self._overlay.clear_search()

    @property
    def query(self) -> str:
        return self._overlay.query

    @property
    def is_searching(self) -> bool:
        return self._overlay.is_searching

    @property
    def searched_chats(self) -> list[SearchListItem]:
        return self._overlay.searched_chats

    @property
    def chat_entities(self) -> dict[int, ChatMessage]:
        return self._store.as_dict()

    @property
    def chats(self) -> list[SearchListItem] | list[ChatMessage]:
        return projector.visible_chats(self._store, self._overlay)

    @property
    def has_selected_chat(self) -> bool:
        return projector.has_selected_chat(self._selected_chat_id)

    @property
    def selected_message_entities(self) -> MessageEntities | None:
        return projector.selected_message_entities(self._store, self._selected_chat_id)

    @property
    def no_search_result(self) -> bool:
        return projector.no_search_result(self._overlay)
