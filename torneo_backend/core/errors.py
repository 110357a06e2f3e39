# errors.py
# Domain exceptions raised by services. Routes translate them into HTTP errors.


class TournamentError(Exception):
    """Base class for every error raised by the tournament services."""


class AuthenticationError(TournamentError):
    """Bad credentials, duplicate registration or unknown session."""


class PermissionDeniedError(TournamentError):
    """The acting user's role does not allow the action."""


class NotFoundError(TournamentError):
    """A referenced document does not exist."""


class ValidationError(TournamentError):
    """Input was rejected before anything was written."""
