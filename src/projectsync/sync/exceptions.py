"""Exceptions for the sync module."""


class SyncError(Exception):
    """Base exception for sync errors."""

    pass


class DecodeError(SyncError):
    """Webhook body is not valid JSON or does not match the event shape."""

    pass


class SchemaGapError(SyncError):
    """The board is missing a field, option or issue type the sync relies on."""

    pass
