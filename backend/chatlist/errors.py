"""Error taxonomy for the conversation list client."""

from typing import Any


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Create standardized error payload."""
        error: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            error["details"] = self.details

        return {"error": error}


class ChatListError(AppError):
    """Base for errors raised by the chat list layer."""


class MalformedPayload(ChatListError):
    """Raised when an ingested record cannot be decoded."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__("MALFORMED_PAYLOAD", message, details)


class UnknownChat(ChatListError):
    """Raised when a mutation addresses a chat id absent from the store."""

    def __init__(self, chat_id: int):
        self.chat_id = chat_id
        super().__init__(
            "UNKNOWN_CHAT",
            f"Chat {chat_id} is not loaded",
            {"chat_id": chat_id},
        )


class NetworkFailure(ChatListError):
    """Raised when the chat backend cannot be reached or rejects a request."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        details = {"status_code": status_code} if status_code is not None else None
        super().__init__("NETWORK_FAILURE", message, details)
