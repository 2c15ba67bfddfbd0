"""Core error types for :mod:`ctxlog`."""


class CtxLogError(Exception):
    """Base class for all ctxlog errors."""

    def __init__(self, note: str, source: str = "Unknown"):
        super().__init__(note)
        self.note = note
        self.source = source

    def __str__(self):
        return self.note


class AuthorizationFailure(CtxLogError):
    """The presented token was rejected.

    Returned as a value by the authorization step, never raised.
    """

    def __init__(self, note: str = "not authorised", source: str = "auth"):
        super().__init__(note, source=source)
