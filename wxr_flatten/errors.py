"""
Exceptions raised while converting a WXR export.
"""

from typing import Optional


class WXRError(Exception):
    """Base class for conversion failures. Carries the source file identity."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.source = source

    def __str__(self) -> str:
        if self.source:
            return f"{self.source}: {self.message}"
        return self.message


class SanitizationError(WXRError):
    """The input could not be repaired into well-formed XML."""


class EmptyDocumentError(WXRError):
    """The tokenizer produced no elements."""


class StructureError(WXRError):
    """Open and close events do not balance."""
