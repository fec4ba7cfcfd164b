"""Error taxonomy for monoboard.

Every error here is recoverable: the operation that raised it made no
change to the project store.
"""


class MonoboardError(Exception):
    """Base class for all monoboard errors."""


class ValidationError(MonoboardError, ValueError):
    """User input failed a precondition (blank name, unknown column...)."""


class NotFoundError(ValidationError):
    """A referenced project does not exist."""


class InvariantViolation(MonoboardError):
    """The operation would break a structural guarantee of the board."""


class CorruptDataError(MonoboardError, ValueError):
    """Persisted or imported data does not parse or has the wrong shape."""


class ProjectImportError(CorruptDataError):
    """An imported project file was rejected."""


class StorageError(MonoboardError, OSError):
    """Writing to (or reading from) durable storage failed."""
