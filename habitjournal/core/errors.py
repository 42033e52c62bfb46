# core/errors.py


class JournalError(Exception):
    """Base class for habit journal errors"""
    pass


class ValidationError(JournalError):
    """A caller passed a value outside the data model"""
    pass


class InvalidWeekKeyError(JournalError, ValueError):
    """A week key is not an ISO calendar date"""
    pass


class UnknownTemplateError(JournalError, KeyError):
    """No habit template with the requested name"""
    pass


class StorageError(JournalError):
    """The persistence adapter could not write a blob"""
    pass


class CorruptedDataError(JournalError):
    """A persisted payload does not have the expected shape"""
    pass
