"""Domain models for chats."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from chatlist.errors import MalformedPayload
from chatlist.models.constants import ChatType
from chatlist.models.domain.message import Message
from chatlist.models.domain.timestamps import parse_timestamp
from chatlist.models.schemas.message import SendingTime

MessageEntities = dict[SendingTime, Message]


def usernames(people: list[Any]) -> list[str]:
    """Flatten member records (plain names or ``{"person": {...}}``) to usernames."""
    names = []
    for entry in people:
        if isinstance(entry, str):
            names.append(entry)
        elif isinstance(entry, dict):
            person = entry.get("person", entry)
            if person.get("username"):
                names.append(person["username"])
    return names


@dataclass
class Chat:
    """Conversation domain model as returned by the backend."""

    id: int
    title: str
    created: datetime
    chat_type: ChatType = ChatType.GROUP
    last_message: Message | None = None
    admin: str | None = None
    people: list[str] = field(default_factory=list)
    access_key: str | None = None

    @property
    def effective_time(self) -> datetime:
        """Time used to order the chat list."""
        if self.last_message is not None:
            return self.last_message.created
        return self.created

    @property
    def is_direct(self) -> bool:
        return self.chat_type == ChatType.DIRECT

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "created": self.created.isoformat(),
            "chat_type": self.chat_type.value,
            "last_message": self.last_message.to_dict() if self.last_message else None,
            "admin": self.admin,
            "people": list(self.people),
            "access_key": self.access_key,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Chat":
        """
        Create from a backend record, decoding the last message's payload.

        Raises:
            MalformedPayload: If the record or its last message is invalid
        """
        if not isinstance(data, dict):
            raise MalformedPayload(f"Chat record must be an object, got {type(data).__name__}")

        try:
            chat_id = data["id"]
            raw_created = data["created"]
        except KeyError as e:
            raise MalformedPayload(f"Chat record is missing {e.args[0]!r}") from e

        if "chat_type" in data:
            try:
                chat_type = ChatType(data["chat_type"])
            except ValueError as e:
                raise MalformedPayload(f"Unknown chat type {data['chat_type']!r}") from e
        else:
            chat_type = ChatType.DIRECT if data.get("is_direct_chat") else ChatType.GROUP

        raw_last_message = data.get("last_message")
        last_message = None
        if raw_last_message is not None:
            try:
                last_message = Message.from_dict(raw_last_message)
            except MalformedPayload as e:
                e.details = {**(e.details or {}), "chat_id": chat_id}
                raise

        return cls(
            id=chat_id,
            title=data.get("title") or "",
            created=parse_timestamp(raw_created),
            chat_type=chat_type,
            last_message=last_message,
            admin=data.get("admin"),
            people=usernames(data.get("people") or []),
            access_key=data.get("access_key"),
        )


@dataclass
class ChatMessage(Chat):
    """A chat held by the entity store, together with its loaded messages."""

    message_entities: MessageEntities = field(default_factory=dict)

    @classmethod
    def from_chat(
        cls,
        chat: Chat,
        message_entities: MessageEntities | None = None,
    ) -> "ChatMessage":
        """Wrap a chat with a (by default empty) message map."""
        return cls(
            id=chat.id,
            title=chat.title,
            created=chat.created,
            chat_type=chat.chat_type,
            last_message=chat.last_message,
            admin=chat.admin,
            people=list(chat.people),
            access_key=chat.access_key,
            message_entities=dict(message_entities or {}),
        )
