"""Normalized chat entity store."""

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import fields, replace
from typing import Any

from chatlist.errors import MalformedPayload, UnknownChat
from chatlist.models.constants import ChatType
from chatlist.models.domain import (
    Chat,
    ChatMessage,
    Message,
    MessageEntities,
    parse_timestamp,
    usernames,
)

logger = logging.getLogger(__name__)

# Fields update_chat may merge; messages go through the message operations
UPDATABLE_FIELDS = frozenset(f.name for f in fields(Chat)) - {"id"}


class ChatEntityStore:
    """
    Canonical copy of every loaded chat, keyed by chat id.

    Each entry carries its own message map keyed by ``sending_time``.
    Ingest operations decode the whole batch before touching the store,
    so a malformed record leaves the previous state intact.
    Messages are stored as shallow copies of the caller's objects.
    """

    def __init__(self) -> None:
        self._entities: dict[int, ChatMessage] = {}

    @staticmethod
    def _decode_page(raw_chats: Iterable[dict[str, Any]]) -> dict[int, ChatMessage]:
        """Decode raw backend records into fresh entries with empty message maps."""
        entities: dict[int, ChatMessage] = {}
        for raw in raw_chats:
            chat = Chat.from_dict(raw)
            entities[chat.id] = ChatMessage.from_chat(chat)
        return entities

    def _require(self, chat_id: int) -> ChatMessage:
        entry = self._entities.get(chat_id)
        if entry is None:
            raise UnknownChat(chat_id)
        return entry

    def load_chats(self, raw_chats: Iterable[dict[str, Any]]) -> None:
        """
        Replace the whole store with a freshly fetched chat list.

        Message history held for any chat is discarded.

        Raises:
            MalformedPayload: If any record cannot be decoded
        """
        entities = self._decode_page(raw_chats)
        self._entities = entities
        logger.info(f"Loaded {len(entities)} chats")

    def load_latest_chats(self, raw_chats: Iterable[dict[str, Any]]) -> None:
        """
        Install a page of latest chats.

        Chats in the page replace their previous entry (message map emptied);
        chats absent from the page are kept.

        Raises:
            MalformedPayload: If any record cannot be decoded
        """
        entities = self._decode_page(raw_chats)
        self._entities.update(entities)
        logger.info(f"Loaded {len(entities)} latest chats ({len(self._entities)} total)")

    def update_chat(self, partial: Mapping[str, Any]) -> None:
        """
        Shallow-merge fields into an existing chat.

        Unknown chat ids are ignored; this never creates a chat.

        Raises:
            MalformedPayload: If a merged value cannot be decoded
        """
        chat_id = partial.get("id")
        entry = self._entities.get(chat_id)
        if entry is None:
            logger.debug(f"Ignoring update for unknown chat {chat_id}")
            return

        changes: dict[str, Any] = {}
        for key, value in partial.items():
            if key == "id":
                continue
            if key not in UPDATABLE_FIELDS:
                logger.warning(f"Ignoring unknown chat field {key!r} for chat {chat_id}")
                continue
            changes[key] = value

        if isinstance(changes.get("last_message"), Mapping):
            changes["last_message"] = Message.from_dict(dict(changes["last_message"]))
        if "people" in changes:
            changes["people"] = usernames(changes["people"] or [])
        if "created" in changes:
            changes["created"] = parse_timestamp(changes["created"])
        if "chat_type" in changes:
            try:
                changes["chat_type"] = ChatType(changes["chat_type"])
            except ValueError as e:
                raise MalformedPayload(f"Unknown chat type {changes['chat_type']!r}") from e

        self._entities[chat_id] = replace(entry, **changes)

    def set_message_entities(self, chat_id: int, message_entities: MessageEntities) -> None:
        """Replace a chat's message map wholesale."""
        entry = self._require(chat_id)
        entry.message_entities = dict(message_entities)

    def add_message(self, chat_id: int, message: Message) -> None:
        """Record a new message and make it the chat's latest."""
        entry = self._require(chat_id)
        stored = replace(message)
        entry.last_message = stored
        entry.message_entities[stored.sending_time] = stored

    def edit_message(self, chat_id: int, message: Message) -> None:
        """
        Record an edited message.

        The latest-message pointer follows the edit only when it already
        points at this message.
        """
        entry = self._require(chat_id)
        stored = replace(message)
        if entry.last_message is not None and entry.last_message.id == stored.id:
            entry.last_message = stored
        entry.message_entities[stored.sending_time] = stored

    def set_last_message(self, chat_id: int, message: Message) -> None:
        """Move the latest-message pointer without touching the message map."""
        entry = self._require(chat_id)
        entry.last_message = replace(message)

    def get(self, chat_id: int) -> ChatMessage | None:
        return self._entities.get(chat_id)

    def ids(self) -> set[int]:
        return set(self._entities)

    def values(self) -> list[ChatMessage]:
        return list(self._entities.values())

    def as_dict(self) -> dict[int, ChatMessage]:
        """Shallow copy of the id to chat map."""
        return dict(self._entities)

    def __contains__(self, chat_id: object) -> bool:
        return chat_id in self._entities

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(self.values())
