"""Search overlay for the conversation list."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from chatlist.models.constants import ChatCardType
from chatlist.models.domain import Chat
from chatlist.services.chatengine import ChatTransport

logger = logging.getLogger(__name__)

HEADING_ID = "conversation"


class SearchState(str, Enum):
    """Lifecycle of the overlay."""

    IDLE = "idle"
    SEARCHING = "searching"
    RESULTS = "results"


@dataclass(frozen=True)
class SearchHeading:
    """Display-only heading placed before a non-empty result list."""

    title: str
    id: str = HEADING_ID

    @property
    def card_type(self) -> ChatCardType:
        return ChatCardType.HEADING


@dataclass(frozen=True)
class SearchResult:
    """A chat returned by the backend search, never merged into the store."""

    chat: Chat

    @property
    def id(self) -> int:
        return self.chat.id

    @property
    def card_type(self) -> ChatCardType:
        return ChatCardType.CONVO


SearchListItem = SearchHeading | SearchResult


class SearchOverlay:
    """
    Transient search input and results.

    While ``searched_chats`` is non-empty it replaces the store's chats in
    the displayed list. Every search takes a generation number; a response
    is applied only if no newer search or reset happened while it was in
    flight.
    """

    def __init__(self, transport: ChatTransport, heading_title: str = "Conversations"):
        self._transport = transport
        self._heading = SearchHeading(title=heading_title)
        self._query = ""
        self._is_searching = False
        self._searched_chats: list[SearchListItem] = []
        self._generation = 0

    @property
    def query(self) -> str:
        return self._query

    @property
    def is_searching(self) -> bool:
        return self._is_searching

    @property
    def searched_chats(self) -> list[SearchListItem]:
        return list(self._searched_chats)

    @property
    def state(self) -> SearchState:
        if self._is_searching:
            return SearchState.SEARCHING
        if not self._query and not self._searched_chats:
            return SearchState.IDLE
        return SearchState.RESULTS

    def set_query(self, text: str) -> None:
        """Record the raw input without searching."""
        self._query = text

    def clear_search(self) -> None:
        """Drop the query and results; in-flight searches become stale."""
        self._generation += 1
        self._query = ""
        self._is_searching = False
        self._searched_chats = []

    async def search(self, text: str, search_context: Any) -> list[SearchListItem]:
        """
        Search chats and install the results.

        An empty ``text`` resets the overlay without calling the backend.

        Args:
            text: Query string
            search_context: Identity the backend scopes results to (username)

        Returns:
            The installed list, or the current one if this search went stale

        Raises:
            NetworkFailure: If the backend call fails
            MalformedPayload: If a result cannot be decoded
        """
        if not text:
            self.clear_search()
            return []

        self._generation += 1
        generation = self._generation
        self._query = text
        self._is_searching = True

        try:
            raw_chats = await self._transport.search_chats(text, search_context)
            results = [SearchResult(Chat.from_dict(raw)) for raw in raw_chats]
        finally:
            if generation == self._generation:
                self._is_searching = False

        if generation != self._generation:
            logger.debug(f"Dropping stale results for query {text!r}")
            return self.searched_chats

        self._searched_chats = [self._heading, *results] if results else []
        logger.debug(f"Search {text!r} returned {len(results)} chats")
        return self.searched_chats
