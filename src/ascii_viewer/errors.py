"""Errors raised while turning an upload into ASCII art."""


class AsciiViewerError(Exception):
    """Base class for conversion failures that end a request."""


class NoImageProvided(AsciiViewerError):
    def __init__(self, message: str = "No image uploaded."):
        super().__init__(message)


class DecodeError(AsciiViewerError):
    """The bytes are not an image Pillow can read."""
