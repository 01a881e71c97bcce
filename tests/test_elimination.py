"""
Unit tests for single elimination bracket generation.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from core.elimination import (
    get_round_name,
    get_round_names,
    required_rounds,
    build_bracket,
    bracket_to_dict,
    MAX_ENTRY_COUNT,
)
from core.errors import InsufficientRoundsError, UnsupportedBracketSizeError
from core.models import Entry, PLACEHOLDER
from core.seeding import seed_entries
from conftest import make_entries


def seeds_of(matchup):
    return (matchup.slot_a.seed, matchup.slot_b.seed)


class TestRoundNames:
    """Tests for round display names."""

    def test_get_round_name_championship(self):
        assert get_round_name(1, 4) == "Championship"

    def test_get_round_name_semifinals(self):
        assert get_round_name(2, 3) == "Semifinals"

    def test_get_round_name_quarterfinals(self):
        assert get_round_name(3, 2) == "Quarterfinals"

    def test_get_round_name_generic(self):
        """Test rounds further from the final are numbered."""
        assert get_round_name(5, 1) == "Round 1"
        assert get_round_name(4, 2) == "Round 2"

    def test_sixteen_team_names(self):
        assert get_round_names(4, 16) == ['First Round', 'Quarterfinals', 'Semifinals', 'Championship']

    def test_eight_and_four_team_names(self):
        assert get_round_names(3, 8) == ['Quarterfinals', 'Semifinals', 'Championship']
        assert get_round_names(2, 4) == ['Semifinals', 'Championship']

    def test_two_team_bracket_is_championship(self):
        assert get_round_names(1, 2) == ['Championship']

    def test_generic_names_for_larger_brackets(self):
        assert get_round_names(5, 32) == ['Round 1', 'Round 2', 'Quarterfinals', 'Semifinals', 'Championship']
        assert get_round_names(6, 64)[:3] == ['Round 1', 'Round 2', 'Round 3']

    def test_twelve_team_override(self):
        assert get_round_names(4, 12) == ['First Round', 'Quarterfinals', 'Semifinals', 'Championship']

    def test_forty_six_team_override(self):
        assert get_round_names(6, 46) == [
            'First Round', 'Round of 32', 'Sweet 16', 'Elite 8', 'Semifinals', 'Championship'
        ]


class TestRequiredRounds:
    def test_powers_of_two(self):
        assert required_rounds(2) == 1
        assert required_rounds(8) == 3
        assert required_rounds(16) == 4
        assert required_rounds(64) == 6

    def test_forty_six_needs_six(self):
        assert required_rounds(46) == 6

    def test_other_sizes_round_up(self):
        assert required_rounds(12) == 4
        assert required_rounds(5) == 3


class TestPowerOfTwoBracket:
    """Tests for standard seeded brackets."""

    def test_first_round_pairings_16(self, bracket16):
        """Test 16 team first round follows 1v16, 8v9, 4v13, ... order."""
        pairs = [seeds_of(m) for m in bracket16.rounds[0]]
        assert pairs == [(1, 16), (8, 9), (4, 13), (5, 12), (2, 15), (7, 10), (3, 14), (6, 11)]

    def test_seed_one_and_two_not_paired(self):
        for size in (4, 8, 16, 32, 64):
            bracket = build_bracket(seed_entries(make_entries(size)), required_rounds(size))
            for matchup in bracket.rounds[0]:
                assert set(seeds_of(matchup)) != {1, 2}

    @pytest.mark.parametrize("size", [2, 4, 8, 16, 32, 64])
    def test_each_round_halves(self, size):
        bracket = build_bracket(seed_entries(make_entries(size)), required_rounds(size))
        assert len(bracket.rounds[0]) == size // 2
        for r in range(1, len(bracket.rounds)):
            assert len(bracket.rounds[r]) == len(bracket.rounds[r - 1]) // 2
        assert len(bracket.rounds[-1]) == 1

    def test_later_rounds_are_placeholders(self, bracket16):
        for round_matchups in bracket16.rounds[1:]:
            for matchup in round_matchups:
                assert matchup.slot_a is PLACEHOLDER
                assert matchup.slot_b is PLACEHOLDER
                assert matchup.winner is None

    def test_matchup_ids_are_round_and_position(self, bracket16):
        assert [m.id for m in bracket16.rounds[0]][:3] == ['r0-m0', 'r0-m1', 'r0-m2']
        assert bracket16.rounds[3][0].id == 'r3-m0'

    def test_round_names_attached(self, bracket16):
        assert bracket16.round_names == ['First Round', 'Quarterfinals', 'Semifinals', 'Championship']
        assert not bracket16.has_byes

    def test_two_team_bracket(self):
        bracket = build_bracket(seed_entries(make_entries(2)), 1)
        assert len(bracket.rounds) == 1
        assert seeds_of(bracket.final) == (1, 2)

    def test_entries_placed_by_list_index(self):
        """Test slot contents come from the seeded list position."""
        seeded = seed_entries(make_entries(4))
        bracket = build_bracket(seeded, 2)
        assert bracket.rounds[0][0].slot_a is seeded[0]
        assert bracket.rounds[0][0].slot_b is seeded[3]
        assert bracket.rounds[0][1].slot_a is seeded[1]
        assert bracket.rounds[0][1].slot_b is seeded[2]

    def test_missing_entries_become_placeholders(self):
        """Test a 16 bracket built from 12 entries leaves seeds 13-16 pending."""
        seeded = seed_entries(make_entries(12))
        bracket = build_bracket(seeded, 4, entry_count=16)
        first = bracket.rounds[0]
        assert first[0].slot_a.seed == 1 and first[0].slot_b is PLACEHOLDER
        assert first[2].slot_b is PLACEHOLDER  # seed 13
        assert first[3].slot_b.seed == 12
        assert first[4].slot_b is PLACEHOLDER  # seed 15
        assert len(first) == 8

    def test_extra_rounds_are_capped(self):
        """Test rounds beyond the final are not created."""
        bracket = build_bracket(seed_entries(make_entries(8)), 5)
        assert [len(r) for r in bracket.rounds] == [4, 2, 1]
        assert bracket.round_names == ['Quarterfinals', 'Semifinals', 'Championship']

    def test_insufficient_rounds(self, seeded16):
        with pytest.raises(InsufficientRoundsError) as exc_info:
            build_bracket(seeded16, 3)
        assert exc_info.value.required == 4
        assert "at least 4 rounds for 16 teams" in str(exc_info.value)

    @pytest.mark.parametrize("count", [0, 1, 3, 6, 12, 24, 45, 47])
    def test_unsupported_sizes(self, count):
        with pytest.raises(UnsupportedBracketSizeError):
            build_bracket(seed_entries(make_entries(count)), 6)

    def test_unsupported_size_checked_before_rounds(self):
        with pytest.raises(UnsupportedBracketSizeError):
            build_bracket(seed_entries(make_entries(12)), 1)

    def test_largest_size_accepted(self):
        bracket = build_bracket(seed_entries(make_entries(MAX_ENTRY_COUNT)), 6)
        assert len(bracket.rounds[0]) == MAX_ENTRY_COUNT // 2

    @pytest.mark.parametrize("count", [128, 1 << 20])
    def test_sizes_above_limit_rejected(self, count):
        """Test oversized brackets fail before any matchups are built."""
        with pytest.raises(UnsupportedBracketSizeError) as exc_info:
            build_bracket([], 30, entry_count=count)
        assert "limit is 64" in str(exc_info.value)


class TestFortySixTeamBracket:
    """Tests for the 46 team bye layout."""

    def test_round_sizes(self, bracket46):
        assert [len(r) for r in bracket46.rounds] == [14, 16, 8, 4, 2, 1]
        assert bracket46.has_byes

    def test_first_round_pairings(self, bracket46):
        """Test seeds 19-32 play seeds 46-33 in the first round."""
        pairs = [seeds_of(m) for m in bracket46.rounds[0]]
        assert pairs[0] == (19, 46)
        assert pairs[1] == (20, 45)
        assert pairs[-1] == (32, 33)
        assert pairs == [(19 + i, 46 - i) for i in range(14)]

    def test_byes_pre_placed_in_round_one(self, bracket46):
        """Test seeds 1-18 start in round 1 and never play round 0."""
        second = bracket46.rounds[1]
        assert [m.slot_a.seed for m in second] == list(range(1, 17))
        assert all(m.slot_b is PLACEHOLDER for m in second[:14])
        assert seeds_of(second[14]) == (15, 18)
        assert seeds_of(second[15]) == (16, 17)

        placed = {m.slot_a.seed for m in second} | {m.slot_b.seed for m in second[14:]}
        assert placed == set(range(1, 19))
        first_round_seeds = {s for m in bracket46.rounds[0] for s in seeds_of(m)}
        assert first_round_seeds == set(range(19, 47))

    def test_round_names(self, bracket46):
        assert bracket46.round_names[1] == 'Round of 32'
        assert bracket46.round_names[-1] == 'Championship'

    def test_needs_six_rounds(self):
        with pytest.raises(InsufficientRoundsError):
            build_bracket(seed_entries(make_entries(46)), 5)

    def test_partial_forty_six(self):
        """Test a 46 bracket with fewer entries leaves the low seeds pending."""
        bracket = build_bracket(seed_entries(make_entries(40)), 6, entry_count=46)
        assert bracket.rounds[0][0].slot_b is PLACEHOLDER  # seed 46
        assert bracket.rounds[0][6].slot_b.seed == 40


class TestBracketToDict:
    """Tests for the display serialization."""

    def test_structure(self, bracket16):
        data = bracket_to_dict(bracket16)
        assert data['entry_count'] == 16
        assert data['total_rounds'] == 4
        assert data['champion'] is None
        assert [r['name'] for r in data['rounds']] == bracket16.round_names
        first = data['rounds'][0]['matchups'][0]
        assert first['id'] == 'r0-m0'
        assert first['slot_a'] == {'seed': 1, 'name': 'Team 1', 'short_name': 'Team 1', 'record': '15-0'}
        assert first['winner'] is None
        assert first['is_playable'] is True

    def test_placeholders_serialize_as_none(self, bracket16):
        data = bracket_to_dict(bracket16)
        final = data['rounds'][-1]['matchups'][0]
        assert final['slot_a'] is None and final['slot_b'] is None
        assert final['is_playable'] is False

    def test_team_named_tbd_is_not_a_placeholder(self):
        """Test a real entry called TBD is still a concrete slot."""
        seeded = seed_entries([Entry('TBD', rank=1), Entry('Other', rank=2)])
        data = bracket_to_dict(build_bracket(seeded, 1))
        assert data['rounds'][0]['matchups'][0]['slot_a']['name'] == 'TBD'
        assert data['rounds'][0]['matchups'][0]['is_playable'] is True
