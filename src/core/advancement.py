"""
Winner selection and advancement through a built bracket.

Every matchup feeds exactly one slot of one matchup in the next round, so a
result change is propagated by walking that chain forward to the final.
"""
import logging
from typing import Optional, Tuple

from core.models import Bracket, Matchup, PLACEHOLDER, SIDE_A, SIDE_B, SIDES

logger = logging.getLogger(__name__)


def find_matchup(bracket: Bracket, matchup_id: str) -> Optional[Matchup]:
    for matchup in bracket.matchups():
        if matchup.id == matchup_id:
            return matchup
    return None


def next_position(bracket: Bracket, matchup: Matchup) -> Optional[Tuple[Matchup, str]]:
    """
    Get the (matchup, side) the winner of ``matchup`` advances into.

    Returns None for the final. In the bye layout every first round winner
    goes to slot B of the same-position round 1 matchup, since slot A
    already holds a bye seed.
    """
    next_round = matchup.round_index + 1
    if next_round >= len(bracket.rounds):
        return None

    if bracket.has_byes and matchup.round_index == 0:
        position, side = matchup.position, SIDE_B
    else:
        position = matchup.position // 2
        side = SIDE_A if matchup.position % 2 == 0 else SIDE_B

    return bracket.rounds[next_round][position], side


def _invalidate_downstream(bracket: Bracket, matchup: Matchup):
    """Revert every slot fed, directly or transitively, by ``matchup``."""
    target = next_position(bracket, matchup)
    while target is not None:
        destination, side = target
        destination.set_slot(side, PLACEHOLDER)
        destination.winner = None
        logger.debug("Cleared %s slot %s", destination.id, side)
        target = next_position(bracket, destination)


def record_winner(bracket: Bracket, matchup_id: str, side: str) -> bool:
    """
    Record the winner of a matchup and advance it to the next round.

    Selecting a placeholder, an unknown matchup or an unknown side does
    nothing. Any decision downstream of the new participant is reset since
    it depended on the previous result.

    Returns True if the bracket changed.
    """
    matchup = find_matchup(bracket, matchup_id)
    if matchup is None:
        logger.warning("Unknown matchup %s", matchup_id)
        return False
    if side not in SIDES:
        logger.warning("Invalid side %r for %s", side, matchup_id)
        return False

    winner = matchup.slot(side)
    if winner.is_placeholder:
        return False
    if matchup.winner == side:
        return False

    matchup.winner = side
    logger.debug("%s won by %s (%s)", matchup.id, side, winner.name)

    target = next_position(bracket, matchup)
    if target is None:
        logger.info("Champion: %s", winner.name)
        return True

    destination, destination_side = target
    destination.set_slot(destination_side, winner)
    destination.winner = None
    _invalidate_downstream(bracket, destination)
    return True


def clear_winner(bracket: Bracket, matchup_id: str) -> bool:
    """Return a matchup to undecided, resetting everything that depended on it."""
    matchup = find_matchup(bracket, matchup_id)
    if matchup is None or not matchup.is_decided:
        return False

    matchup.winner = None
    _invalidate_downstream(bracket, matchup)
    return True


def champion(bracket: Bracket):
    """The winner of the final, or None while it is undecided."""
    return bracket.final.winning_entry()
