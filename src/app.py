"""
Flask web application for Bracket Builder.

Serves the ranked entries and a single bracket session as JSON.
"""
import os
import yaml
from flask import Flask, request, jsonify
from core.errors import BracketError, InvalidEntriesError
from core.session import BracketSession, DEFAULT_ENTRY_COUNT, DEFAULT_ROUND_COUNT, DEFAULT_SEEDING_METHOD
from core.standings import load_entries, parse_entries

app = Flask(__name__)

BASE_DIR = os.path.dirname(os.path.dirname(__file__))
DATA_DIR = os.environ.get('BRACKET_DATA_DIR', os.path.join(BASE_DIR, 'data'))
ENTRIES_FILE = os.environ.get('BRACKET_ENTRIES_FILE', os.path.join(DATA_DIR, 'entries.yaml'))

# One bracket at a time; generating a new one replaces it
bracket_session = BracketSession()


def get_entries() -> list:
    """Load ranked entries from ENTRIES_FILE, or an empty list if unavailable."""
    if not os.path.exists(ENTRIES_FILE):
        return []
    try:
        return load_entries(ENTRIES_FILE)
    except (OSError, yaml.YAMLError, InvalidEntriesError) as e:
        app.logger.warning(f'Failed to parse {ENTRIES_FILE}: {e}')
        return []


def _error(message: str, status: int = 400):
    return jsonify({'success': False, 'error': message}), status


def _bracket_response(**extra):
    payload = {'success': True, 'bracket': bracket_session.bracket_view()}
    payload.update(extra)
    return jsonify(payload)


@app.route('/api/entries', methods=['GET'])
def api_entries():
    """List the ranked entries available for a bracket."""
    return jsonify({'entries': [entry.to_dict() for entry in get_entries()]})


@app.route('/api/generate', methods=['POST'])
def api_generate():
    """Seed entries and build a new bracket, replacing the current one."""
    data = request.get_json(silent=True) or {}
    try:
        entry_count = int(data.get('entry_count', DEFAULT_ENTRY_COUNT))
        round_count = int(data.get('round_count', DEFAULT_ROUND_COUNT))
    except (TypeError, ValueError):
        return _error('entry_count and round_count must be integers')
    seeding_method = data.get('seeding_method', DEFAULT_SEEDING_METHOD)

    # Entries posted with the request (a manual selection) win over the file
    try:
        if 'entries' in data:
            entries = parse_entries(data['entries'])
        else:
            entries = get_entries()
        bracket_session.generate(entry_count, round_count, seeding_method, entries,
                                 allow_partial=bool(data.get('allow_partial', False)))
    except BracketError as e:
        app.logger.warning(f'Bracket generation failed: {e}')
        return _error(str(e))

    return _bracket_response(seeds=bracket_session.seeding_view())


@app.route('/api/bracket', methods=['GET'])
def api_bracket():
    if bracket_session.bracket is None:
        return _error('No bracket generated yet.', 404)
    return _bracket_response()


@app.route('/api/winner', methods=['POST'])
def api_record_winner():
    """Record a matchup winner; side is 'A' or 'B'."""
    data = request.get_json(silent=True) or {}
    if bracket_session.bracket is None:
        return _error('No bracket generated yet.', 404)
    matchup_id = data.get('matchup_id', '')
    side = data.get('side', '')
    changed = bracket_session.record_winner(matchup_id, side)
    return _bracket_response(changed=changed)


@app.route('/api/winner/clear', methods=['POST'])
def api_clear_winner():
    data = request.get_json(silent=True) or {}
    if bracket_session.bracket is None:
        return _error('No bracket generated yet.', 404)
    changed = bracket_session.clear_winner(data.get('matchup_id', ''))
    return _bracket_response(changed=changed)


@app.route('/api/seeds', methods=['GET'])
def api_seeds():
    return jsonify({'seeds': bracket_session.seeding_view()})


@app.route('/api/reseed', methods=['POST'])
def api_reseed():
    """Apply a seed edit. Invalid edits return the unchanged seeds and an error."""
    data = request.get_json(silent=True) or {}
    seeds, error = bracket_session.reseed(data)
    return jsonify({
        'success': error is None,
        'error': error,
        'seeds': [entry.to_dict() for entry in seeds],
    })


@app.route('/api/regenerate', methods=['POST'])
def api_regenerate():
    """Rebuild the bracket from the edited seeds."""
    try:
        bracket_session.regenerate()
    except BracketError as e:
        return _error(str(e))
    return _bracket_response()


if __name__ == '__main__':
    app.run(debug=os.environ.get('FLASK_DEBUG') == '1')
