"""Exceptions raised while ingesting recommendation sources."""

from typing import Optional


class IngestionError(Exception):
    """Base class for recoverable ingestion failures."""


class TransportError(IngestionError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(IngestionError):
    pass
