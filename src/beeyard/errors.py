"""
Error hierarchy for beeyard.

Services never let these escape a public operation; they are turned into a
:class:`beeyard.result.Result`. ``Result.unwrap()`` raises the two outcome
kinds for callers that prefer exceptions.
"""


class BeeyardError(Exception):
    """Base class for every error raised by beeyard."""


class StoreError(BeeyardError):
    """Infrastructure problem with the underlying store."""


class StoreClosed(StoreError):
    """The database handle was used before open() or after close()."""


class DataUnavailable(BeeyardError):
    """A read failed, or an entity that had to exist is missing."""


class OperationFailure(BeeyardError):
    """A mutating transaction could not complete."""
