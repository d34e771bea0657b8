"""
Game configuration.

Only `attempt_limit` is read by the game engine; the presentation options
are carried for hosts (e.g. the terminal CLI) and round-trip untouched.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Dict

from packages.session.state import DEFAULT_ATTEMPT_LIMIT


@dataclass(frozen=True)
class Configuration:
    attempt_limit: int = DEFAULT_ATTEMPT_LIMIT
    emoji_tiles: bool = False     # emoji squares instead of ANSI colors
    show_keyboard: bool = True    # letter hints under the grid

    def __post_init__(self):
        if int(self.attempt_limit) < 1:
            raise ValueError(f"attempt_limit must be >= 1; got {self.attempt_limit}")
        for name in ("emoji_tiles", "show_keyboard"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(f"{name} must be true or false; got {value!r}")

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> "Configuration":
        """Build from a loaded dict, ignoring keys this version does not know."""
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}
        if "attempt_limit" in kwargs:
            kwargs["attempt_limit"] = int(kwargs["attempt_limit"])
        return cls(**kwargs)


DEFAULT_CONFIGURATION = Configuration()
