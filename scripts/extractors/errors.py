"""Exceptions raised while extracting district results."""

from typing import Optional


class ExtractionError(Exception):
    """Base class for extraction failures."""

    def __init__(self, message: str, district: Optional[int] = None):
        self.district = district
        if district is not None:
            message = f"District {district}: {message}"
        super().__init__(message)


class FetchError(ExtractionError):
    """A district page could not be retrieved."""


class HeaderNotFoundError(ExtractionError):
    """The page has no unique candidate header row."""


class ColumnMappingError(ExtractionError):
    """The candidate header cannot be mapped to distinct party columns."""


class ColumnMismatchError(ExtractionError):
    """A result row's width differs from the candidate header's."""


class DuplicatePollError(ExtractionError):
    """A poll was reported twice for the same district."""
