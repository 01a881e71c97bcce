"""
Seeding: bracket slot order and ranking of candidate entries.
"""
import logging
from typing import List, Sequence

from core.errors import InvalidSizeError
from core.models import Entry, SeededEntry, UNRANKED

logger = logging.getLogger(__name__)

STANDINGS = 'standings'
POINT_DIFFERENTIAL = 'pointDifferential'
WINS = 'wins'
WIN_PERCENT = 'winPercent'

SEEDING_METHODS = (STANDINGS, POINT_DIFFERENTIAL, WINS, WIN_PERCENT)


def is_power_of_two(n) -> bool:
    """True for integers 1, 2, 4, 8, ... (booleans excluded)."""
    if isinstance(n, bool) or not isinstance(n, int):
        return False
    return n > 0 and (n & (n - 1)) == 0


def generate_seeding_order(size: int) -> List[int]:
    """
    Generate the standard tournament bracket order for ``size`` seeds.

    Read in consecutive pairs, the result gives the first-round matchups.
    If all higher seeds win they meet in the proper rounds, and seeds 1 and 2
    can only meet in the final.

    For 8 seeds: [1, 8, 4, 5, 2, 7, 3, 6]
    This gives matchups: 1v8, 4v5, 2v7, 3v6

    Raises InvalidSizeError unless size is a power of two >= 2.
    """
    if not is_power_of_two(size) or size < 2:
        raise InvalidSizeError(f"Bracket size must be a power of two >= 2, got {size!r}")
    return _mirror_order(size)


def _mirror_order(size: int) -> List[int]:
    if size == 2:
        return [1, 2]

    # Each seed is followed by its mirror in the doubled bracket
    offset = size + 1
    result = []
    for seed in _mirror_order(size // 2):
        result.extend([seed, offset - seed])
    return result


def _rank_key(entry: Entry):
    rank = entry.rank
    if rank == UNRANKED or rank is None:
        return (1, 0)
    try:
        return (0, float(rank))
    except (TypeError, ValueError):
        return (1, 0)


def _win_percent(entry: Entry) -> float:
    return entry.metric(WIN_PERCENT, default=entry.metric('leagueWinPercent'))


_SORT_KEYS = {
    STANDINGS: (_rank_key, False),
    POINT_DIFFERENTIAL: (lambda e: e.metric(POINT_DIFFERENTIAL), True),
    WINS: (lambda e: e.metric(WINS), True),
    WIN_PERCENT: (_win_percent, True),
}


def seed_entries(entries: Sequence[Entry], method: str = STANDINGS) -> List[SeededEntry]:
    """
    Order entries by a seeding method and assign seeds 1..N.

    Seeding methods:
    - standings: existing rank ascending, unranked entries last
    - pointDifferential / wins / winPercent: that metric descending

    Missing metrics count as 0. Ties keep their input order since
    list.sort is stable. Prior ranks are discarded; the seed is the
    position in the resulting order.
    """
    if method not in _SORT_KEYS:
        logger.warning("Unknown seeding method %r, falling back to %s", method, STANDINGS)
        method = STANDINGS

    key, descending = _SORT_KEYS[method]
    # reverse=True still keeps equal elements in input order
    ordered = sorted(entries, key=key, reverse=descending)
    return [SeededEntry(entry, seed) for seed, entry in enumerate(ordered, start=1)]
