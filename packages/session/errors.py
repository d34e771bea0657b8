from __future__ import annotations


class SessionError(Exception):
    """Base class for guards raised by SessionState."""


class SessionClosed(SessionError):
    """A guess was recorded after the session was already won or exhausted."""


class CapacityExceeded(SessionError):
    """A guess was recorded while the history already holds `attempt_limit` rows."""
