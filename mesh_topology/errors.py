"""
Exceptions raised by the topology analysis.
"""

from typing import Optional


class InvalidGeometry(ValueError):
    """
    Raised when a triangle index buffer can't be analyzed as-is.

    This derives from ValueError so code that already treats bad input as
    a ValueError (the CLI does) handles it without special cases. The buffer
    is never "fixed up" - a trailing partial triangle is an error, not
    something to quietly drop.

    Attributes:
        reason: Short human-readable description of what's wrong
        length: Length of the offending buffer, when known
    """

    def __init__(self, reason: str, length: Optional[int] = None):
        self.reason = reason
        self.length = length
        if length is None:
            message = f"Invalid geometry: {reason}"
        else:
            message = f"Invalid geometry: {reason} (buffer length {length})"
        super().__init__(message)
