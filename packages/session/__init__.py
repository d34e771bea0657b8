from .errors import CapacityExceeded, SessionClosed, SessionError
from .state import DEFAULT_ATTEMPT_LIMIT, SessionState
from .stats import Stats, StatsAggregator
from .summary import puzzle_number, share_text

# SessionManager lives in packages.session.manager; it depends on
# packages.storage, which itself imports from this package.

__all__ = [
    "CapacityExceeded", "SessionClosed", "SessionError",
    "DEFAULT_ATTEMPT_LIMIT", "SessionState",
    "Stats", "StatsAggregator",
    "puzzle_number", "share_text",
]
