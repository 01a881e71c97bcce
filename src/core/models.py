UNRANKED = 'unranked'

SIDE_A = 'A'
SIDE_B = 'B'
SIDES = (SIDE_A, SIDE_B)


class Entry:
    """A ranked team as supplied by the standings source."""

    is_placeholder = False

    def __init__(self, name, rank=UNRANKED, record='', metrics=None, short_name=None):
        self.name = name
        self.rank = rank
        self.record = record
        self.metrics = dict(metrics) if metrics else {}
        self.short_name = short_name or name

    def metric(self, key, default=0.0):
        """Numeric value of a metric, or ``default`` when it is absent or unparseable."""
        value = self.metrics.get(key)
        if value is None:
            return default
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    def to_dict(self):
        return {
            'name': self.name,
            'short_name': self.short_name,
            'rank': self.rank,
            'record': self.record,
            'metrics': dict(self.metrics),
        }

    def __repr__(self):
        return f"Entry(name={self.name}, rank={self.rank}, record={self.record})"


class SeededEntry(Entry):
    """An entry with a bracket seed assigned (1 is the strongest)."""

    def __init__(self, entry, seed):
        super().__init__(
            name=entry.name,
            rank=entry.rank,
            record=entry.record,
            metrics=entry.metrics,
            short_name=entry.short_name,
        )
        self.seed = seed

    def with_seed(self, seed):
        return SeededEntry(self, seed)

    def to_dict(self):
        data = super().to_dict()
        data['seed'] = self.seed
        return data

    def __repr__(self):
        return f"SeededEntry(seed={self.seed}, name={self.name}, record={self.record})"


class Placeholder:
    """A slot whose participant is still pending an earlier result."""

    is_placeholder = True
    name = None
    seed = None

    def to_dict(self):
        return None

    def __repr__(self):
        return "Placeholder()"


PLACEHOLDER = Placeholder()


class Matchup:
    def __init__(self, round_index, position, slot_a=PLACEHOLDER, slot_b=PLACEHOLDER):
        self.id = f"r{round_index}-m{position}"
        self.round_index = round_index
        self.position = position
        self.slot_a = slot_a
        self.slot_b = slot_b
        self.winner = None

    def slot(self, side):
        return self.slot_a if side == SIDE_A else self.slot_b

    def set_slot(self, side, value):
        if side == SIDE_A:
            self.slot_a = value
        else:
            self.slot_b = value

    @property
    def is_decided(self):
        return self.winner is not None

    @property
    def is_playable(self):
        """Both participants known and no winner recorded yet."""
        return (not self.slot_a.is_placeholder and not self.slot_b.is_placeholder
                and self.winner is None)

    def winning_entry(self):
        if self.winner is None:
            return None
        return self.slot(self.winner)

    def __repr__(self):
        return f"Matchup(id={self.id}, slot_a={self.slot_a}, slot_b={self.slot_b}, winner={self.winner})"


class Bracket:
    """Rounds of matchups for one single-elimination tournament.

    ``rounds[0]`` is the earliest round. ``has_byes`` marks the 46-entry
    shape, where round 0 feeds round 1 one-to-one instead of two-to-one.
    """

    def __init__(self, rounds, entry_count, round_names, has_byes=False):
        self.rounds = rounds
        self.entry_count = entry_count
        self.round_names = round_names
        self.has_byes = has_byes

    @property
    def final(self):
        return self.rounds[-1][0]

    def matchups(self):
        for round_matchups in self.rounds:
            for matchup in round_matchups:
                yield matchup

    def __repr__(self):
        return f"Bracket(entry_count={self.entry_count}, rounds={[len(r) for r in self.rounds]})"
