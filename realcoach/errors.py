"""Exceptions raised by the RealCoach engine."""


class ConfigurationError(ValueError):
    """Raised when an input or setting holds a value the engine does not recognise.

    Unrecognised pipeline stages, motivation levels and timeframes are never
    coerced to a default; callers decide whether to skip, log or abort.
    """
