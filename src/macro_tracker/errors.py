"""Error kinds surfaced by the core services."""


class MacroTrackerError(Exception):
    """Base class for errors raised by the application core."""

    kind = "error"


class ValidationError(MacroTrackerError):
    """Input is malformed or out of range."""

    kind = "validation_error"


class NotFoundError(MacroTrackerError):
    """A referenced entity does not exist for the user."""

    kind = "not_found"


class UpstreamUnavailable(MacroTrackerError):
    """The inference service could not be reached or returned an error."""

    kind = "upstream_unavailable"


class ParseError(MacroTrackerError):
    """The inference response did not have the expected shape."""

    kind = "parse_error"


class PersistenceError(MacroTrackerError):
    """A datastore operation failed."""

    kind = "persistence_error"
