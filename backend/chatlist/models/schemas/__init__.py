"""Pydantic schemas for payloads exchanged with the chat backend."""

from chatlist.models.schemas.message import MessageCustomData, SendingTime, decode_custom_json

__all__ = ["MessageCustomData", "SendingTime", "decode_custom_json"]
