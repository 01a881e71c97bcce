"""
Manual seed edits on a seeded list.

Edits return a new list and never touch a bracket that was already built;
rebuild the bracket to apply them.
"""
from typing import List, Sequence

from core.errors import InvalidSeedAssignment
from core.models import SeededEntry


def renumber(entries: Sequence[SeededEntry]) -> List[SeededEntry]:
    """Reassign seeds 1..N by list position."""
    return [entry.with_seed(seed) for seed, entry in enumerate(entries, start=1)]


def reorder(seeded: Sequence[SeededEntry], from_index: int, to_index: int) -> List[SeededEntry]:
    """Move the entry at from_index to to_index and renumber all seeds."""
    count = len(seeded)
    if not (0 <= from_index < count) or not (0 <= to_index < count):
        raise InvalidSeedAssignment(
            f"Cannot move position {from_index} to {to_index} in a list of {count}"
        )

    entries = list(seeded)
    entry = entries.pop(from_index)
    entries.insert(to_index, entry)
    return renumber(entries)


def set_seed(seeded: Sequence[SeededEntry], index: int, new_seed: int) -> List[SeededEntry]:
    """Give the entry at index an explicit seed number, shifting the others."""
    count = len(seeded)
    if isinstance(new_seed, bool) or not isinstance(new_seed, int) or not 1 <= new_seed <= count:
        raise InvalidSeedAssignment(f"Seed must be between 1 and {count}, got {new_seed!r}")
    return reorder(seeded, index, new_seed - 1)
