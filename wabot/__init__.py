"""Command-dispatch webhook bot for a chat-api style messaging gateway."""

__version__ = "0.1.0"
