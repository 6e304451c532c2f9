"""Errors raised by key-value tree store backends."""


class StoreError(Exception):
    """Base class for key-value store failures."""

    pass


class StoreReadError(StoreError):
    """A read from the store failed (network, permission, bad response)."""

    pass


class StoreWriteError(StoreError):
    """A write to the store failed (network, permission, missing record)."""

    pass
