class StakeTrackerError(Exception):
    """Base error for the stake tracker service."""


class IngestValidationError(StakeTrackerError):
    """Incoming cashout payload is missing required ids or is malformed."""
