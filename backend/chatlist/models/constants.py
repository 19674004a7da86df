"""Enumerations shared by the chat and message models."""

from enum import Enum


class ChatType(str, Enum):
    """Kind of conversation."""

    DIRECT = "DIRECT"
    GROUP = "GROUP"


class SendState(str, Enum):
    """Delivery state stored in a message's custom payload."""

    SENDING = "SENDING"
    SENT = "SENT"
    RECEIVED = "RECEIVED"
    SEEN = "SEEN"


class MessageType(str, Enum):
    """Kind of entry in a message thread."""

    MESSAGE = "MESSAGE"
    DAY_NOTIFICATION = "DAY_NOTIFICATION"


class ChatCardType(str, Enum):
    """How an entry of the displayed chat list is rendered."""

    CONVO = "CONVO"
    HEADING = "HEADING"
