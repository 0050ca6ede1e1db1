# Per-guild lotto settings and the helpers that build or change them

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_HOURS = 4


def _dedupe(ids: Iterable[int]) -> Tuple[int, ...]:
    seen = set()
    ordered = []
    for member_id in ids:
        if member_id not in seen:
            seen.add(member_id)
            ordered.append(member_id)
    return tuple(ordered)


def _optional_id(value: Any) -> Optional[int]:
    if value is None:
        return None
    return int(value)


def parse_hours(argument: str) -> int:
    """Parse the argument of ``set hours``. Raises ValueError unless it is a positive whole number."""
    text = argument.strip()
    if not (text.isascii() and text.lstrip("+-").isdigit()):
        raise ValueError(f"not a whole number: {text!r}")
    hours = int(text)
    if hours < 1:
        raise ValueError(f"hours must be positive, got {hours}")
    return hours


@dataclass(frozen=True)
class LottoSettings:
    hours: int = DEFAULT_HOURS
    channel_id: Optional[int] = None
    role_id: Optional[int] = None
    winners: Tuple[int, ...] = ()  # index 0 is the most recent winner

    @classmethod
    def from_record(cls, record: Optional[Dict[str, Any]]) -> "LottoSettings":
        """Fill a stored record in over the defaults.

        Missing keys keep their default, an invalid ``hours`` falls back to
        the default and duplicate winners are dropped (first one kept).
        """
        if not record:
            return cls()

        hours = record.get('hours', DEFAULT_HOURS)
        if isinstance(hours, bool) or not isinstance(hours, int) or hours < 1:
            logger.warning(f"Ignoring invalid stored hours value {hours!r}")
            hours = DEFAULT_HOURS

        return cls(
            hours=hours,
            channel_id=_optional_id(record.get('channel')),
            role_id=_optional_id(record.get('role')),
            winners=_dedupe(int(w) for w in record.get('winners') or ()),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            'hours': self.hours,
            'channel': self.channel_id,
            'role': self.role_id,
            'winners': list(self.winners),
        }

    def with_hours(self, hours: int) -> "LottoSettings":
        if hours < 1:
            raise ValueError(f"hours must be positive, got {hours}")
        return replace(self, hours=hours)

    def with_channel(self, channel_id: int) -> "LottoSettings":
        return replace(self, channel_id=channel_id)

    def with_role(self, role_id: int) -> "LottoSettings":
        return replace(self, role_id=role_id)

    def with_winners(self, winners: Iterable[int]) -> "LottoSettings":
        return replace(self, winners=_dedupe(winners))
