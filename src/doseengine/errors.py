# src/doseengine/errors.py


class DosingEngineError(ValueError):
    """Base class for everything the engine raises on bad input."""


class InvalidRule(DosingEngineError):
    """Malformed dosing rule: empty time list, bad interval or inverted window."""


class InvalidRange(DosingEngineError):
    """Projection range whose end comes before its start."""


class OccurrenceCeilingExceeded(DosingEngineError):
    """A projection would produce more occurrences than the engine allows."""
