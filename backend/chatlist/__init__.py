"""Client-side synchronization of a chat application's conversation list."""

__version__ = "1.0.0"
