# Winner rotation: who is up next, and how the pool is reordered afterwards

import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple


class EmptyRosterError(Exception):
    """Raised when a winner has to be drawn from a guild with no members."""


@dataclass(frozen=True)
class Rotation:
    current: Optional[int]
    next: int
    winners: Tuple[int, ...]
    drawn: bool  # True when ``next`` came from the random draw


def online_winners(winners: Sequence[int], is_present: Callable[[int], bool]) -> List[int]:
    """Winners that are still members of the guild, in pool order.

    Members that left are only skipped here; they stay in the pool.
    """
    return [winner for winner in winners if is_present(winner)]


def reorder(winners: Sequence[int], current: Optional[int], next_winner: int) -> Tuple[int, ...]:
    """Put ``next_winner`` in front and drop ``current`` from the pool."""
    rest = [w for w in winners if w != next_winner and w != current]
    return (next_winner, *rest)


def rotate(
    winners: Sequence[int],
    is_present: Callable[[int], bool],
    roster: Sequence[int],
    choose: Optional[Callable[[Sequence[int]], int]] = None,
) -> Rotation:
    """Advance the rotation by one step.

    With more than one present winner the second one takes over from the
    first. Otherwise the next winner is drawn at random from the whole
    roster, which is how new members get into the pool.
    """
    online = online_winners(winners, is_present)

    if len(online) > 1:
        current, next_winner = online[0], online[1]
        drawn = False
    else:
        if not roster:
            raise EmptyRosterError("cannot draw a winner from an empty roster")
        current = online[0] if online else None
        next_winner = (choose or random.choice)(roster)
        drawn = True

    return Rotation(
        current=current,
        next=next_winner,
        winners=reorder(winners, current, next_winner),
        drawn=drawn,
    )
