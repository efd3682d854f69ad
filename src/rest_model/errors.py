"""Exceptions raised while encoding or decoding representations."""

from src.wiki_client.errors import WikiRestError


class XmlCodecError(WikiRestError):
    """Raised when a representation cannot be marshalled or unmarshalled."""

    def __init__(self, message: str):
        super().__init__(f"XML codec error: {message}")
        self.original_message = message
