"""Chat list data models."""
