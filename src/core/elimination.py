"""
Single elimination bracket generation.
"""
import logging
import math
from typing import Dict, List, Optional, Sequence

from core.errors import InsufficientRoundsError, UnsupportedBracketSizeError
from core.models import Bracket, Matchup, PLACEHOLDER, SeededEntry
from core.seeding import generate_seeding_order, is_power_of_two

logger = logging.getLogger(__name__)

# 46 teams: 18 byes + 14 first round winners = 32 in round 1
BYE_BRACKET_SIZE = 46
BYE_SEED_COUNT = 18
BYE_FIRST_ROUND_MATCHUPS = 14
BYE_SECOND_ROUND_MATCHUPS = 16
BYE_REQUIRED_ROUNDS = 6

# Largest bracket the builder accepts
MAX_ENTRY_COUNT = 64

ROUND_NAME_OVERRIDES = {
    46: ['First Round', 'Round of 32', 'Sweet 16', 'Elite 8', 'Semifinals', 'Championship'],
    12: ['First Round', 'Quarterfinals', 'Semifinals', 'Championship'],
}

# Trimmed from the front when fewer rounds are played
ROUND_NAME_TABLES = {
    16: ['First Round', 'Quarterfinals', 'Semifinals', 'Championship'],
    8: ['Quarterfinals', 'Semifinals', 'Championship'],
    4: ['Semifinals', 'Championship'],
}


def get_round_name(rounds_remaining: int, round_number: int) -> str:
    """Get the name of a round from how many rounds are left including it."""
    if rounds_remaining == 1:
        return "Championship"
    elif rounds_remaining == 2:
        return "Semifinals"
    elif rounds_remaining == 3:
        return "Quarterfinals"
    else:
        return f"Round {round_number}"


def get_round_names(round_count: int, entry_count: int) -> List[str]:
    """Get display names for every round of a bracket, earliest first."""
    if entry_count in ROUND_NAME_OVERRIDES:
        return list(ROUND_NAME_OVERRIDES[entry_count])

    table = ROUND_NAME_TABLES.get(entry_count)
    if table and round_count <= len(table):
        return table[len(table) - round_count:]

    return [get_round_name(round_count - i, i + 1) for i in range(round_count)]


def check_bracket_size(entry_count: int) -> None:
    """Raise UnsupportedBracketSizeError unless entry_count can be built."""
    if entry_count > MAX_ENTRY_COUNT:
        raise UnsupportedBracketSizeError(
            f"Cannot build a bracket for {entry_count} teams; the limit is {MAX_ENTRY_COUNT}"
        )
    if entry_count != BYE_BRACKET_SIZE and (not is_power_of_two(entry_count) or entry_count < 2):
        raise UnsupportedBracketSizeError(
            f"Cannot build a bracket for {entry_count} teams; "
            f"use a power of two or {BYE_BRACKET_SIZE}"
        )


def required_rounds(entry_count: int) -> int:
    """Minimum number of rounds needed to crown a champion."""
    if entry_count == BYE_BRACKET_SIZE:
        return BYE_REQUIRED_ROUNDS
    if entry_count < 2:
        return 0
    return math.ceil(math.log2(entry_count))


def build_bracket(seeded: Sequence[SeededEntry], round_count: int,
                  entry_count: Optional[int] = None) -> Bracket:
    """
    Build a complete bracket from seeded entries.

    Args:
        seeded: entries in seed order (index 0 is seed 1)
        round_count: number of rounds the user wants to play
        entry_count: bracket size; defaults to len(seeded). Seeds missing
            from a shorter seeded list become placeholders.

    Power-of-two sizes use standard bracket seeding (1 vs 16, 8 vs 9, ...).
    46 entries use the bye layout: seeds 19-46 play first, seeds 1-18
    start in round 1.

    The bracket always ends at its final: a round_count above the minimum
    is accepted, but the extra rounds are not created.

    Raises:
        UnsupportedBracketSizeError: size is neither a power of two nor 46,
            or is above MAX_ENTRY_COUNT
        InsufficientRoundsError: round_count is too small for the size
    """
    if entry_count is None:
        entry_count = len(seeded)

    check_bracket_size(entry_count)

    needed = required_rounds(entry_count)
    if round_count < needed:
        raise InsufficientRoundsError(entry_count, round_count, needed)
    if round_count > needed:
        logger.info("%d teams only need %d rounds; ignoring the extra %d",
                    entry_count, needed, round_count - needed)

    if entry_count == BYE_BRACKET_SIZE:
        rounds = _build_bye_rounds(seeded)
    else:
        rounds = _build_standard_rounds(seeded, entry_count)

    bracket = Bracket(
        rounds=rounds,
        entry_count=entry_count,
        round_names=get_round_names(len(rounds), entry_count),
        has_byes=entry_count == BYE_BRACKET_SIZE,
    )
    logger.info("Built %d-team bracket: %s matchups per round",
                entry_count, [len(r) for r in rounds])
    return bracket


def _entry_at(seeded: Sequence[SeededEntry], index: int):
    if 0 <= index < len(seeded):
        return seeded[index]
    return PLACEHOLDER


def _placeholder_rounds(first_round_index: int, first_round_size: int) -> List[List[Matchup]]:
    """Rounds of undetermined matchups, halving down to the final."""
    rounds = []
    round_index = first_round_index
    num_matchups = first_round_size
    while num_matchups >= 1:
        rounds.append([Matchup(round_index, i) for i in range(num_matchups)])
        round_index += 1
        num_matchups //= 2
    return rounds


def _build_standard_rounds(seeded: Sequence[SeededEntry], entry_count: int) -> List[List[Matchup]]:
    order = generate_seeding_order(entry_count)

    first_round = []
    for i in range(0, len(order), 2):
        first_round.append(Matchup(
            0, i // 2,
            slot_a=_entry_at(seeded, order[i] - 1),
            slot_b=_entry_at(seeded, order[i + 1] - 1),
        ))

    return [first_round] + _placeholder_rounds(1, len(first_round) // 2)


def _build_bye_rounds(seeded: Sequence[SeededEntry]) -> List[List[Matchup]]:
    # Round 0: seed 19 vs 46, 20 vs 45, ..., 32 vs 33
    first_round = []
    for i in range(BYE_FIRST_ROUND_MATCHUPS):
        first_round.append(Matchup(
            0, i,
            slot_a=_entry_at(seeded, BYE_SEED_COUNT + i),
            slot_b=_entry_at(seeded, BYE_BRACKET_SIZE - 1 - i),
        ))

    # Round 1: seeds 1-16 in slot A; first round winners fill slot B of
    # matchups 0-13, seeds 17 and 18 take the last two (15 vs 18, 16 vs 17)
    second_round = []
    for i in range(BYE_SECOND_ROUND_MATCHUPS):
        second_round.append(Matchup(1, i, slot_a=_entry_at(seeded, i)))
    remaining_byes = range(BYE_SECOND_ROUND_MATCHUPS, BYE_SEED_COUNT)
    for matchup, index in zip(second_round[BYE_FIRST_ROUND_MATCHUPS:], reversed(remaining_byes)):
        matchup.slot_b = _entry_at(seeded, index)

    return [first_round, second_round] + _placeholder_rounds(2, BYE_SECOND_ROUND_MATCHUPS // 2)


def _slot_to_dict(slot) -> Optional[Dict]:
    if slot.is_placeholder:
        return None
    return {
        'seed': slot.seed,
        'name': slot.name,
        'short_name': slot.short_name,
        'record': slot.record,
    }


def bracket_to_dict(bracket: Bracket) -> Dict:
    """
    Get bracket data formatted for display.

    Placeholder slots serialize as None so a real team named "TBD" is never
    mistaken for an undetermined one.
    """
    rounds = []
    for round_index, round_matchups in enumerate(bracket.rounds):
        rounds.append({
            'name': bracket.round_names[round_index],
            'round': round_index,
            'matchups': [{
                'id': m.id,
                'slot_a': _slot_to_dict(m.slot_a),
                'slot_b': _slot_to_dict(m.slot_b),
                'winner': m.winner,
                'is_playable': m.is_playable,
            } for m in round_matchups],
        })

    champion = bracket.final.winning_entry()
    return {
        'entry_count': bracket.entry_count,
        'total_rounds': len(bracket.rounds),
        'has_byes': bracket.has_byes,
        'rounds': rounds,
        'champion': _slot_to_dict(champion) if champion is not None else None,
    }
