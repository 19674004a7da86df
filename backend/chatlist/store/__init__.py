"""Conversation list state: entity store, search overlay and derived views."""

from chatlist.store.chats import ChatsState
from chatlist.store.entities import ChatEntityStore
from chatlist.store.search import (
    SearchHeading,
    SearchListItem,
    SearchOverlay,
    SearchResult,
    SearchState,
)

__all__ = [
    "ChatEntityStore",
    "ChatsState",
    "SearchHeading",
    "SearchListItem",
    "SearchOverlay",
    "SearchResult",
    "SearchState",
]
