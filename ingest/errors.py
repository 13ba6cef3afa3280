"""Exceptions raised by the import stages.

The orchestrator converts these into ``ImportResult`` values; they never
escape ``DatabaseImporter.load``.
"""

from __future__ import annotations


class IngestError(Exception):
    """Base class for dataset import errors."""


class ShapeParseError(IngestError):
    """A landmark annotation file could not be parsed."""


class RectangleFileError(IngestError):
    """A rectangle list file is malformed."""


class RectangleCountMismatchError(IngestError):
    """Loaded rectangles do not pair up with the candidate entries."""

    def __init__(self, expected: int, found: int) -> None:
        super().__init__(
            f"Mismatch between number of shapes in database ({expected}) "
            f"and rectangles found ({found})"
        )
        self.expected = expected
        self.found = found


class ImageDecodeError(IngestError):
    """An image file is missing or could not be decoded."""
