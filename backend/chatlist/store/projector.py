"""Derived views over the entity store and the search overlay."""

from collections.abc import Iterable

from chatlist.models.domain import Chat, ChatMessage, MessageEntities
from chatlist.store.entities import ChatEntityStore
from chatlist.store.search import SearchListItem, SearchOverlay


def sort_by_effective_time(chats: Iterable[Chat]) -> list[Chat]:
    """Newest activity first; equal times keep their input order."""
    return sorted(chats, key=lambda chat: chat.effective_time, reverse=True)


def visible_chats(
    store: ChatEntityStore,
    overlay: SearchOverlay,
) -> list[SearchListItem] | list[ChatMessage]:
    """The list shown to the user: search results if any, else the sorted store."""
    searched = overlay.searched_chats
    if searched:
        return searched
    return sort_by_effective_time(store.values())


def no_search_result(overlay: SearchOverlay) -> bool:
    return bool(overlay.query) and not overlay.searched_chats


def has_selected_chat(selected_chat_id: int | None) -> bool:
    return selected_chat_id is not None


def selected_message_entities(
    store: ChatEntityStore,
    selected_chat_id: int | None,
) -> MessageEntities | None:
    """Message map of the selected chat; None if nothing loaded is selected."""
    if selected_chat_id is None:
        return None
    entry = store.get(selected_chat_id)
    return entry.message_entities if entry is not None else None
