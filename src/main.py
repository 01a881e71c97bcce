# Command line entry point: print a seeded bracket built from an entries file

import argparse
import logging
import os
import sys
from core.elimination import bracket_to_dict
from core.errors import BracketError, InvalidEntriesError
from core.seeding import SEEDING_METHODS
from core.session import BracketSession, DEFAULT_ENTRY_COUNT, DEFAULT_ROUND_COUNT, DEFAULT_SEEDING_METHOD
from core.standings import load_entries


def format_slot(slot):
    if slot is None:
        return "TBD"
    return f"({slot['seed']}) {slot['name']} {slot['record']}".rstrip()


def print_bracket(bracket_data):
    for round_data in bracket_data['rounds']:
        print(f"\n--- {round_data['name']} ---")
        for matchup in round_data['matchups']:
            print(f"  {matchup['id']}: {format_slot(matchup['slot_a'])} vs {format_slot(matchup['slot_b'])}")


def parse_args(argv=None):
    script_dir = os.path.dirname(__file__)
    default_entries = os.path.join(os.path.dirname(script_dir), 'data', 'entries.yaml')

    parser = argparse.ArgumentParser(description='Build a single elimination bracket from ranked entries.')
    parser.add_argument('entries', nargs='?', default=default_entries, help='YAML file of ranked entries')
    parser.add_argument('--teams', type=int, default=DEFAULT_ENTRY_COUNT, help='bracket size')
    parser.add_argument('--rounds', type=int, default=DEFAULT_ROUND_COUNT, help='rounds to play')
    parser.add_argument('--method', choices=SEEDING_METHODS, default=DEFAULT_SEEDING_METHOD)
    parser.add_argument('--partial', action='store_true', help='allow fewer entries than the bracket size')
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        entries = load_entries(args.entries)
    except InvalidEntriesError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if not entries:
        print(f"No entries loaded. Check {args.entries}")
        return 1

    session = BracketSession()
    try:
        session.generate(args.teams, args.rounds, args.method, entries, allow_partial=args.partial)
    except BracketError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print("--- Seeds ---")
    for entry in session.seeded:
        print(f"  {entry.seed:>2}. {entry.name} {entry.record}".rstrip())
    print_bracket(bracket_to_dict(session.bracket))
    return 0


if __name__ == "__main__":
    sys.exit(main())
