"""
Shared pytest fixtures for bracket builder tests.

Running tests:
    pytest tests/
"""
import pytest
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from core.models import Entry
from core.seeding import seed_entries
from core.elimination import build_bracket


def make_entries(count, **metrics_by_name):
    """Entries 'Team 1'..'Team N' ranked 1..N with a 'W-L' record."""
    entries = []
    for i in range(1, count + 1):
        name = f"Team {i}"
        entries.append(Entry(
            name=name,
            rank=i,
            record=f"{count - i}-{i - 1}",
            metrics=metrics_by_name.get(name, {}),
        ))
    return entries


def decide_all(bracket, side='A'):
    """Record ``side`` as the winner of every matchup, round by round."""
    from core.advancement import record_winner
    for round_matchups in bracket.rounds:
        for matchup in round_matchups:
            if not matchup.slot(side).is_placeholder:
                record_winner(bracket, matchup.id, side)


@pytest.fixture
def entries_factory():
    return make_entries


@pytest.fixture
def seeded16():
    return seed_entries(make_entries(16))


@pytest.fixture
def bracket16(seeded16):
    """A fresh 16-team, 4-round bracket seeded by standings."""
    return build_bracket(seeded16, 4)


@pytest.fixture
def bracket46():
    return build_bracket(seed_entries(make_entries(46)), 6)


@pytest.fixture
def entries_file(tmp_path):
    """A YAML file with 16 plain entries."""
    import yaml
    path = tmp_path / "entries.yaml"
    path.write_text(yaml.dump({'entries': [
        {'name': e.name, 'rank': e.rank, 'record': e.record, 'metrics': {'wins': 16 - e.rank}}
        for e in make_entries(16)
    ]}, default_flow_style=False))
    return path
