"""Transport to the remote chat backend."""

from chatlist.services.chatengine.client import ChatEngineClient, ChatTransport

__all__ = ["ChatEngineClient", "ChatTransport"]
