class MoonPhaseError(Exception):
    """Base error."""

class InvalidInstantError(MoonPhaseError, ValueError):
    """Raised when a calendar instant (or its timezone) cannot be used."""

class IndeterminateClassificationError(MoonPhaseError):
    """Raised by the strict classifier when no phase brackets the instant."""
