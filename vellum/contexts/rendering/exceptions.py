"""Custom exceptions for the rendering context."""

from typing import Optional


class RenderError(Exception):
    """
    Exception raised when the page encoder fails.

    Attributes:
        message: Error description
        original_error: The exception raised by the encoder
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error

        parts = [message]
        if original_error:
            parts.append(f"\nOriginal error: {original_error}")

        super().__init__("\n".join(parts))
