"""Pydantic schema for the structured payload carried by messages."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from chatlist.errors import MalformedPayload
from chatlist.models.constants import MessageType, SendState

# Key of a message inside its chat's message map
SendingTime = int | str


class MessageCustomData(BaseModel):
    """Decoded ``custom_json`` of a message.

    The backend stores this as an opaque JSON string; the client owns its shape.
    Keys other than the ones below are kept as extras.
    """

    model_config = ConfigDict(extra="allow")

    sending_time: SendingTime = Field(..., description="Ordering key within the chat")
    send_state: SendState | None = Field(None, description="Delivery state")
    message_type: MessageType | None = Field(None, description="Thread entry kind")


def decode_custom_json(raw: Any) -> MessageCustomData:
    """
    Decode a ``custom_json`` value into its typed form.

    Accepts the encoded JSON string sent by the backend, an already decoded
    mapping, or a MessageCustomData instance.

    Raises:
        MalformedPayload: If the value is not valid structured data
    """
    if isinstance(raw, MessageCustomData):
        return raw

    try:
        if isinstance(raw, (str, bytes)):
            return MessageCustomData.model_validate_json(raw)
        if isinstance(raw, Mapping):
            return MessageCustomData.model_validate(dict(raw))
    except ValidationError as e:
        raise MalformedPayload(
            "Invalid custom_json payload",
            {"errors": [err["msg"] for err in e.errors()]},
        ) from e

    raise MalformedPayload(
        f"custom_json must be a JSON string or object, got {type(raw).__name__}"
    )
