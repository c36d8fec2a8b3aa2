# followyourflush/exceptions.py
"""User-facing, recoverable errors raised while resolving a journey."""


class FlushError(Exception):
    """Base exception for all journey errors. The message is shown to the user."""
    default_message = "Something went wrong."

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)


class OutOfCoverageError(FlushError):
    """Raised when the clicked point falls in no catchment."""
    default_message = "That's outside of Toronto's boundary!"


class UnmodeledAuthorityError(FlushError):
    """Raised when a catchment matched but no treatment plant record exists for it."""
    default_message = "This area is serviced by Peel region's treatment plants!"


class UpstreamUnavailableError(FlushError):
    """Raised when the directions service fails or finds no route."""
    default_message = "Could not generate walking route."


class DataNotReadyError(FlushError):
    """Raised when a click arrives before both feature collections are loaded."""
    default_message = "Data still loading…"
