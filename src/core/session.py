"""
A bracket session: the single current bracket and its seeded entries.

Building a new bracket replaces the old one; reseeding discards it until
the bracket is regenerated.
"""
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from core import advancement, editor
from core.elimination import build_bracket, bracket_to_dict, check_bracket_size
from core.errors import BracketError, NotEnoughEntriesError
from core.models import Bracket, Entry, SeededEntry
from core.seeding import STANDINGS, seed_entries

logger = logging.getLogger(__name__)

DEFAULT_ENTRY_COUNT = 16
DEFAULT_ROUND_COUNT = 4
DEFAULT_SEEDING_METHOD = STANDINGS


class BracketSession:
    def __init__(self):
        self.bracket: Optional[Bracket] = None
        self.seeded: List[SeededEntry] = []
        self.entry_count = DEFAULT_ENTRY_COUNT
        self.round_count = DEFAULT_ROUND_COUNT
        self.seeding_method = DEFAULT_SEEDING_METHOD

    def generate(self, entry_count: int, round_count: int, seeding_method: str,
                 source_list: Sequence[Entry], allow_partial: bool = False) -> Bracket:
        """
        Seed the first entry_count entries of source_list and build a bracket.

        With allow_partial, a source list shorter than entry_count is used
        anyway and the missing seeds become placeholders.
        """
        check_bracket_size(entry_count)
        candidates = list(source_list[:entry_count])
        if len(candidates) < entry_count and not allow_partial:
            raise NotEnoughEntriesError(f"Only {len(candidates)} teams available!")
        if not candidates:
            raise NotEnoughEntriesError("Select at least one team first!")

        seeded = seed_entries(candidates, seeding_method)
        bracket = build_bracket(seeded, round_count, entry_count=entry_count)

        self.seeded = seeded
        self.bracket = bracket
        self.entry_count = entry_count
        self.round_count = round_count
        self.seeding_method = seeding_method
        logger.info("Generated %d-team bracket seeded by %s from %d entries",
                    entry_count, seeding_method, len(candidates))
        return bracket

    def regenerate(self) -> Bracket:
        """Rebuild the bracket from the current (possibly edited) seeds."""
        if not self.seeded:
            raise NotEnoughEntriesError("Generate a bracket first!")
        self.bracket = build_bracket(self.seeded, self.round_count, entry_count=self.entry_count)
        return self.bracket

    def record_winner(self, matchup_id: str, side: str) -> bool:
        if self.bracket is None:
            return False
        return advancement.record_winner(self.bracket, matchup_id, side)

    def clear_winner(self, matchup_id: str) -> bool:
        if self.bracket is None:
            return False
        return advancement.clear_winner(self.bracket, matchup_id)

    def reseed(self, op: Dict) -> Tuple[List[SeededEntry], Optional[str]]:
        """
        Apply a seed edit.

        Supported ops:
            {'op': 'reorder', 'from': 3, 'to': 0}
            {'op': 'set_seed', 'index': 3, 'seed': 1}

        An invalid edit leaves the seeds unchanged and returns the error
        message alongside them. A successful edit drops the current bracket.
        """
        kind = op.get('op')
        try:
            if kind == 'reorder':
                seeded = editor.reorder(self.seeded, int(op['from']), int(op['to']))
            elif kind == 'set_seed':
                seeded = editor.set_seed(self.seeded, int(op['index']), int(op['seed']))
            else:
                return self.seeded, f"Unknown seed edit: {kind!r}"
        except BracketError as e:
            logger.warning("Seed edit %r rejected: %s", op, e)
            return self.seeded, str(e)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Malformed seed edit %r: %s", op, e)
            return self.seeded, f"Invalid seed edit: {e}"

        self.seeded = seeded
        self.bracket = None
        return self.seeded, None

    def bracket_view(self) -> Optional[Dict]:
        if self.bracket is None:
            return None
        return bracket_to_dict(self.bracket)

    def seeding_view(self) -> List[Dict]:
        return [entry.to_dict() for entry in self.seeded]

    def champion(self):
        if self.bracket is None:
            return None
        return advancement.champion(self.bracket)
