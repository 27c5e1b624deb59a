"""Error taxonomy for panel operations."""

from __future__ import annotations


class PanelError(Exception):
    pass


class ValidationError(PanelError, ValueError):
    """A required field was blank; the operation was aborted before any write."""


class Rejection(PanelError):
    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class NotFoundRejection(Rejection):
    pass


class ParseRejection(Rejection):
    pass


class NothingToExport(PanelError):
    pass


class SchemaError(PanelError):
    pass
