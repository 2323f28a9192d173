"""
Error taxonomy for the housing lifecycle engine.

Two families live here:

EXPECTED BUSINESS CONDITIONS
    ValidationError, NotFoundError, DuplicateKeyError, ConflictError,
    StateConflictError, EligibilityError, WindowClosedError,
    CapacityExceededError.
    Lifecycle operations return these inside a ``Result.failure(...)``.
    An ineligible applicant or a full project is something to report
    to the caller, not a crash.

FATAL-TO-THE-OPERATION
    PersistenceError, CorruptRecordError.
    Raised when the CSV collaborator cannot read or write, or when a row
    cannot be turned back into a consistent record.
"""


class HousingError(Exception):
    """Base class for every error the engine knows about."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message or self.__class__.__name__


class ValidationError(HousingError):
    """Malformed input: bad NRIC, bad date, unknown enum label, empty text."""


class NotFoundError(HousingError):
    """A referenced entity is absent from its store."""


class DuplicateKeyError(HousingError):
    """An entity with the same key is already stored."""


class ConflictError(HousingError):
    """The operation collides with another record (e.g. officer/applicant role clash)."""


class StateConflictError(ConflictError):
    """Illegal transition for the record's current state, or an existing non-terminal record."""


class EligibilityError(HousingError):
    """The applicant's age / marital status does not allow the requested flat type."""


class WindowClosedError(HousingError):
    """The project is hidden or today is outside its application period."""


class CapacityExceededError(HousingError):
    """No officer slot or no flat unit left."""


class PersistenceError(HousingError):
    """Reading or writing the backing files failed."""


class CorruptRecordError(PersistenceError):
    """A persisted row cannot be parsed or its cross-references cannot be resolved."""

    def __init__(self, message: str = "", source: str = "", line: int = 0):
        if source:
            message = f"{source}:{line}: {message}" if line else f"{source}: {message}"
        super().__init__(message)
        self.source = source
        self.line = line
