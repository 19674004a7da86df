"""Domain models for messages."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from chatlist.errors import MalformedPayload
from chatlist.models.domain.timestamps import parse_timestamp
from chatlist.models.schemas.message import MessageCustomData, SendingTime, decode_custom_json


@dataclass
class Message:
    """Chat message domain model."""

    id: int
    custom_json: MessageCustomData
    created: datetime
    sender_username: str = ""
    text: str | None = None
    attachments: list[dict[str, Any]] = field(default_factory=list)

    @property
    def sending_time(self) -> SendingTime:
        """Key of this message inside its chat's message map."""
        return self.custom_json.sending_time

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with the custom payload decoded."""
        return {
            "id": self.id,
            "sender_username": self.sender_username,
            "text": self.text,
            "created": self.created.isoformat(),
            "attachments": list(self.attachments),
            "custom_json": self.custom_json.model_dump(mode="json", exclude_none=True),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Message":
        """
        Create from a backend record.

        ``custom_json`` may still be the encoded string the backend stores.

        Raises:
            MalformedPayload: If a required field is missing or undecodable
        """
        if not isinstance(data, dict):
            raise MalformedPayload(f"Message record must be an object, got {type(data).__name__}")

        try:
            message_id = data["id"]
            raw_custom_json = data["custom_json"]
            raw_created = data["created"]
        except KeyError as e:
            raise MalformedPayload(f"Message record is missing {e.args[0]!r}") from e

        return cls(
            id=message_id,
            custom_json=decode_custom_json(raw_custom_json),
            created=parse_timestamp(raw_created),
            sender_username=data.get("sender_username") or "",
            text=data.get("text"),
            attachments=list(data.get("attachments") or []),
        )
