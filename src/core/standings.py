"""
Conversion of external standings data into ranked entries.

Fetching standings is someone else's job; this module only normalizes what
they hand over, either standings records with a ``stats`` list:

    {'team': {'displayName': 'Georgia Bulldogs', 'shortDisplayName': 'Georgia'},
     'stats': [{'name': 'wins', 'value': 11}, {'name': 'overall', 'displayValue': '11-1'}]}

or plain entry mappings (name, rank, record, metrics).
"""
import logging
from typing import Dict, List, Optional

import yaml

from core.errors import InvalidEntriesError
from core.models import Entry, UNRANKED

logger = logging.getLogger(__name__)


def _require_list(items, what: str) -> list:
    """Raise InvalidEntriesError unless items is a list of mappings."""
    if not isinstance(items, list):
        raise InvalidEntriesError(f"{what} must be a list, got {type(items).__name__}")
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise InvalidEntriesError(f"{what} item {index + 1} must be a mapping, got {type(item).__name__}")
    return items


def _find_stat(stats: List[Dict], *names: str) -> Optional[Dict]:
    for stat in stats:
        if stat.get('name') in names:
            return stat
    return None


def _number(value) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def get_record(stats: List[Dict]) -> str:
    """Win-loss record for display: overall stat, then wins-losses, then N/A."""
    for stat in stats:
        if (stat.get('name') == 'overall' or stat.get('type') == 'total') and stat.get('displayValue'):
            return stat['displayValue']

    wins = _find_stat(stats, 'wins')
    losses = _find_stat(stats, 'losses')
    if wins and losses:
        return f"{_format_count(wins.get('value'))}-{_format_count(losses.get('value'))}"

    return 'N/A'


def _format_count(value) -> str:
    number = _number(value)
    if number is not None and number.is_integer():
        return str(int(number))
    return str(value)


def get_metrics(stats: List[Dict]) -> Dict[str, float]:
    """All numeric stats keyed by name."""
    metrics = {}
    for stat in stats:
        name = stat.get('name')
        value = _number(stat.get('value'))
        if name and value is not None:
            metrics[name] = value
    return metrics


def entry_from_standing(standing: Dict, index: int) -> Entry:
    """
    Build an entry from one standings record.

    The rank is the positive playoffSeed stat when present, otherwise the
    record's position in the list (index + 1).
    """
    team = standing.get('team') or {}
    if not isinstance(team, dict):
        raise InvalidEntriesError(f"standings item {index + 1} team must be a mapping")
    stats = _require_list(standing.get('stats') or [], f"standings item {index + 1} stats")

    rank = index + 1
    playoff_seed = _find_stat(stats, 'playoffSeed')
    if playoff_seed:
        value = _number(playoff_seed.get('value'))
        if value is not None and value > 0:
            rank = int(value)

    name = team.get('displayName') or team.get('name')
    return Entry(
        name=name,
        rank=rank,
        record=get_record(stats),
        metrics=get_metrics(stats),
        short_name=team.get('shortDisplayName'),
    )


def entries_from_standings(standings: List[Dict]) -> List[Entry]:
    """Convert standings records to entries sorted by rank."""
    _require_list(standings, 'standings')
    entries = [entry_from_standing(standing, index) for index, standing in enumerate(standings)]
    entries.sort(key=lambda e: e.rank)
    return entries


def entry_from_dict(data: Dict, index: int) -> Entry:
    """Build an entry from a plain mapping; a missing rank means unranked."""
    metrics = data.get('metrics') or {}
    if not isinstance(metrics, dict):
        raise InvalidEntriesError(f"entry {index + 1} metrics must be a mapping")
    rank = data.get('rank', UNRANKED)
    if rank is None:
        rank = UNRANKED
    return Entry(
        name=data.get('name') or f"Team {index + 1}",
        rank=rank,
        record=str(data.get('record', '')),
        metrics=metrics,
        short_name=data.get('short_name'),
    )


def parse_entries(data) -> List[Entry]:
    """
    Parse entries from loaded YAML/JSON data.

    Accepts a list of entry mappings, or a mapping with an ``entries``
    (plain) or ``standings`` (stats list) key.
    Raises InvalidEntriesError when the data has any other shape.
    """
    if not data:
        return []
    if isinstance(data, dict):
        if 'standings' in data:
            return entries_from_standings(data['standings'] or [])
        data = data.get('entries') or []
    _require_list(data, 'entries')
    return [entry_from_dict(item, index) for index, item in enumerate(data)]


def load_entries(file_path: str) -> List[Entry]:
    """Load ranked entries from a YAML file."""
    with open(file_path, mode='r', encoding='utf-8') as file:
        data = yaml.safe_load(file)
    entries = parse_entries(data)
    logger.info("Loaded %d entries from %s", len(entries), file_path)
    return entries
