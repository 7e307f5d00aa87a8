"""ircwire: an asyncio IRC client protocol core."""

__version__ = "0.1.0"
