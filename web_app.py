"""
Flask web interface for the Random Seat Generator.

Run: python web_app.py
Visit: http://localhost:5000
"""

import io
import os
from typing import Optional
from flask import Flask, render_template_string, jsonify, send_file, request

from seatgen.models import SeatingConfig, Arrangement
from seatgen.data_loader import load_seating_config, config_from_dict, config_to_dict, save_seating_config
from seatgen.arranger import generate as generate_arrangement
from seatgen.validators import validate_config
from seatgen.seed import derive_seed, default_context_token, describe_seed
from seatgen.excel_exporter import ExcelExporter
from seatgen.errors import ConfigError, ArrangementUnsatisfiable
from seatgen import utils

DATA_DIR = "data"
CONFIG_FILE = os.path.join(DATA_DIR, "seat_config.json")

app = Flask(__name__)
app.config["SEAT_CONFIG_FILE"] = CONFIG_FILE

# --- Global Cache ---
# One in-flight request per session; the UI only ever holds the finished result.
g_config: Optional[SeatingConfig] = None
g_arrangement: Optional[Arrangement] = None


def get_config() -> Optional[SeatingConfig]:
    global g_config
    if g_config is None:
        g_config = load_seating_config(app.config["SEAT_CONFIG_FILE"])
    return g_config


def _error_response(error: Exception):
    if isinstance(error, ConfigError):
        return jsonify({'success': False, 'error': str(error), 'problems': error.problems}), 400
    return jsonify({
        'success': False,
        'error': str(error),
        'attempts': error.attempts,
        'violations': [str(v) for v in error.violations],
    }), 422


SEAT_TABLE_PAGE = """
<!DOCTYPE html>
<html><head>
    <title>Random Seat Generator</title>
    <style>
        body { font-family: sans-serif; margin: 30px; background: #f5f7fa; }
        .front { text-align: center; background: #d3d3d3; padding: 6px; font-weight: bold; }
        table { border-collapse: collapse; margin-top: 10px; }
        th { background: #4F81BD; color: #fff; padding: 6px 12px; }
        td { border: 1px solid #bfbfbf; padding: 10px 14px; text-align: center; background: #fff; min-width: 80px; }
        td.disabled { background: #e0e0e0; color: #808080; }
        td.leader { background: #fff2cc; font-weight: bold; }
        .meta { color: #555; margin-top: 12px; }
        .error { color: #c0392b; }
    </style>
</head><body>
    <h1>Random Seat Generator</h1>
    <form action="/" method="get">
        <input type="text" name="seed" placeholder="Seed (optional)" value="{{ seed or '' }}">
        <button type="submit">Generate</button>
        {% if arrangement %}<a href="/download">Download .xlsx</a>{% endif %}
    </form>
    {% if error %}
        <p class="error">{{ error }}</p>
    {% elif arrangement %}
        <table>
            <tr><td colspan="{{ columns + 1 }}" class="front">FRONT</td></tr>
            <tr><th></th>{% for label in column_labels %}<th>{{ label }}</th>{% endfor %}</tr>
            {% for row in cells %}
            <tr>
                <th>{{ row.label }}</th>
                {% for cell in row.cells %}<td class="{{ cell.css }}">{{ cell.text }}</td>{% endfor %}
            </tr>
            {% endfor %}
        </table>
        <p class="meta">Seed: {{ arrangement.seed_label }} &middot; attempts: {{ arrangement.attempts }}{% if arrangement.lucky %} &middot; lucky: {{ arrangement.lucky }}{% endif %}</p>
    {% else %}
        <p>No seating config loaded.</p>
    {% endif %}
</body></html>
"""


def _build_cells(arrangement: Arrangement):
    config = arrangement.config
    leaders = set(arrangement.leaders)
    rows = []
    for r, names in enumerate(arrangement.rows_as_names()):
        cells = []
        for c, text in enumerate(names):
            occupant = arrangement.occupant((r, c))
            if (r, c) in config.disabled_seats:
                css = "disabled"
            elif occupant in leaders:
                css = "leader"
            else:
                css = ""
            cells.append({'text': text, 'css': css})
        rows.append({'label': utils.row_label(r), 'cells': cells})
    return rows


def run_generation(seed=None) -> Arrangement:
    """Generates with `seed` (or the config's own seed) and caches the result."""
    global g_arrangement
    config = get_config()
    if config is None:
        raise ConfigError(f"No seating config found at {app.config['SEAT_CONFIG_FILE']}")
    if seed is not None and str(seed).strip():
        config = config.with_seed(seed)
    g_arrangement = generate_arrangement(config, context_token=default_context_token())
    return g_arrangement


# --- Flask Routes ---

@app.route('/')
def index():
    seed = request.args.get('seed')
    error = None
    arrangement = g_arrangement
    if seed is not None or arrangement is None:
        try:
            arrangement = run_generation(seed)
        except (ConfigError, ArrangementUnsatisfiable) as e:
            error = str(e)
            arrangement = None

    columns = arrangement.config.columns if arrangement else 0
    return render_template_string(
        SEAT_TABLE_PAGE,
        seed=seed,
        error=error,
        arrangement=arrangement,
        columns=columns,
        column_labels=[utils.column_label(c) for c in range(columns)],
        cells=_build_cells(arrangement) if arrangement else [],
    )

@app.route('/generate')
def generate():
    try:
        arrangement = run_generation(request.args.get('seed'))
    except (ConfigError, ArrangementUnsatisfiable) as e:
        print(f"ERROR during generation: {e}")
        return _error_response(e)
    return jsonify({'success': True, 'arrangement': arrangement.as_dict()})

@app.route('/download')
def download():
    if g_arrangement is None:
        return "No seat table has been generated yet.", 400

    buffer = io.BytesIO(ExcelExporter(g_arrangement).to_bytes())
    return send_file(
        buffer,
        as_attachment=True,
        download_name="Seat_Table.xlsx",
        mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )

# --- API ENDPOINTS ---

@app.route('/api/arrangement')
def api_arrangement():
    if g_arrangement is None:
        return jsonify({'success': False, 'error': 'No seat table has been generated yet.'}), 404
    return jsonify({'success': True, 'arrangement': g_arrangement.as_dict(), 'text': str(g_arrangement)})

@app.route('/api/seed-preview')
def api_seed_preview():
    seed = request.args.get('seed')
    try:
        config = get_config()
    except ConfigError as e:
        return _error_response(e)
    if seed is None and config is not None:
        seed = config.seed
    return jsonify({
        'seed': derive_seed(seed, default_context_token()),
        'label': describe_seed(seed),
    })

@app.route('/api/config', methods=['GET', 'POST'])
def api_config():
    """GET returns the loaded config; POST replaces it (and saves if asked)."""
    global g_config, g_arrangement
    if request.method == 'GET':
        config = get_config()
        if config is None:
            return jsonify({'success': False, 'error': 'No seating config loaded.'}), 404
        return jsonify({'success': True, 'config': config_to_dict(config)})

    payload = request.get_json(force=True, silent=True)
    try:
        if not isinstance(payload, dict):
            raise ConfigError("Config must be a JSON object")
        config = config_from_dict(payload)
        validate_config(config)
    except ConfigError as e:
        return _error_response(e)

    g_config = config
    g_arrangement = None
    if request.args.get('save') == '1':
        save_seating_config(config, app.config["SEAT_CONFIG_FILE"])
    return jsonify({'success': True})


# --- Main Execution ---
if __name__ == '__main__':
    print("=" * 70)
    print("Starting Random Seat Generator Web Interface".center(70))
    print("=" * 70)
    print("\nOpen your browser and visit: http://localhost:5000")
    print("Press Ctrl+C to stop the server\n")
    app.run(debug=True, port=5000, use_reloader=False)
