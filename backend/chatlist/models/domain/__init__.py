"""Domain models for chats and messages."""

from chatlist.models.domain.chat import Chat, ChatMessage, MessageEntities, usernames
from chatlist.models.domain.message import Message
from chatlist.models.domain.timestamps import parse_timestamp

__all__ = [
    "Chat",
    "ChatMessage",
    "Message",
    "MessageEntities",
    "parse_timestamp",
    "usernames",
]
