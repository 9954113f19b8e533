"""
seatgen/data_loader.py

Reads seating configs (JSON) and rosters (CSV) from disk.
Seat positions in files are 1-indexed, as people count seats;
everything in memory is 0-indexed.
"""

import csv
import json
import os
from typing import List, Dict, Optional, FrozenSet, Any
from .models import SeatingConfig, SeparationPair, SeatCoordinate
from .grid import SeatGrid
from .errors import ConfigError
from . import utils


def _parse_int(data: Dict[str, Any], key: str, default: Optional[int] = None) -> int:
    value = data.get(key, default)
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is None:
            raise ConfigError(f"Missing required key: {key}")
        return default
    try:
        return int(value)
    except (ValueError, TypeError):
        raise ConfigError(f"Invalid {key}: {value!r}")

def _parse_int_list(value, key: str) -> List[int]:
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split()
    try:
        return [int(v) for v in value]
    except (ValueError, TypeError):
        raise ConfigError(f"Invalid {key}: {value!r}")

def _parse_seat(value, key: str) -> SeatCoordinate:
    """[row, col] or 'R1C2' / '1,2' text, 1-indexed -> 0-indexed."""
    if isinstance(value, str):
        row, column = utils.parse_seat_label(value)
        if row < 0:
            raise ConfigError(f"Invalid seat in {key}: {value!r}")
        return SeatCoordinate(row, column)
    try:
        row, column = value
        return SeatCoordinate(int(row) - 1, int(column) - 1)
    except (ValueError, TypeError):
        raise ConfigError(f"Invalid seat in {key}: {value!r}")

def _parse_separation_pairs(value) -> List[SeparationPair]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [line for line in value.splitlines() if line.strip()]
    pairs = []
    for entry in value:
        names = entry.split(None, 1) if isinstance(entry, str) else [str(n).strip() for n in entry]
        if len(names) != 2:
            raise ConfigError(f"Invalid separate pair: {entry!r}")
        pairs.append(SeparationPair(names[0].strip(), names[1].strip()))
    return pairs

def _parse_eligibility(value, grid: SeatGrid) -> Dict[str, FrozenSet[SeatCoordinate]]:
    """
    Each rule is a dict of 1-indexed filters. 'rows'/'columns' keep only
    those, 'not_rows'/'not_columns' drop them, 'seats' lists seats outright.
    """
    if not value:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"Invalid eligibility: expected an object, got {type(value).__name__}")

    eligibility = {}
    for name, rule in value.items():
        if not isinstance(rule, dict):
            raise ConfigError(f"Invalid eligibility rule for {name!r}")
        key = f"eligibility.{name}"
        if "seats" in rule:
            allowed = frozenset(_parse_seat(s, key) for s in rule["seats"])
        else:
            allowed = frozenset(grid.usable_seats)
        if "rows" in rule:
            allowed &= grid.seats_in_rows(r - 1 for r in _parse_int_list(rule["rows"], key))
        if "columns" in rule:
            allowed &= grid.seats_in_columns(c - 1 for c in _parse_int_list(rule["columns"], key))
        if "not_rows" in rule:
            allowed &= grid.seats_excluding_rows(r - 1 for r in _parse_int_list(rule["not_rows"], key))
        if "not_columns" in rule:
            allowed &= grid.seats_excluding_columns(c - 1 for c in _parse_int_list(rule["not_columns"], key))
        eligibility[name] = allowed
    return eligibility

def _parse_random_between_rows(data: Dict[str, Any]) -> Optional[int]:
    """Row band height; absent, blank or 0 turns banding off."""
    value = data.get("random_between_rows")
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return _parse_int(data, "random_between_rows") or None

def _parse_bool(data: Dict[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None or isinstance(value, (bool, int)):
        return bool(value)
    text = str(value).strip().lower()
    if text in ("true", "yes", "1"):
        return True
    if text in ("false", "no", "0", ""):
        return False
    raise ConfigError(f"Invalid {key}: {value!r}")


def config_from_dict(data: Dict[str, Any]) -> SeatingConfig:
    """
    Builds a SeatingConfig from the JSON form. Raises ConfigError on
    malformed values; structural checks happen later in validate_config.
    """
    rows = _parse_int(data, "row_count")
    columns = _parse_int(data, "column_count")

    disabled = {_parse_seat(s, "disabled_seats") for s in data.get("disabled_seats") or []}
    for position in _parse_int_list(data.get("disabled_last_row_pos"), "disabled_last_row_pos"):
        disabled.add(SeatCoordinate(rows - 1, position - 1))

    seed = data.get("seed")
    if isinstance(seed, str) and not seed.strip():
        seed = None

    rules = data.get("eligibility")
    eligibility = _parse_eligibility(rules, SeatGrid(rows, columns, disabled)) if rules else {}

    return SeatingConfig(
        rows=rows,
        columns=columns,
        roster=utils.parse_name_list(data.get("names")),
        disabled_seats=disabled,
        separation_pairs=_parse_separation_pairs(data.get("separate_list")),
        eligibility=eligibility,
        group_leaders=utils.parse_name_list(data.get("group_leader_list")),
        seed=seed,
        max_attempts=_parse_int(data, "max_attempts", utils.DEFAULT_MAX_ATTEMPTS),
        random_between_rows=_parse_random_between_rows(data),
        lucky=_parse_bool(data, "lucky_option"),
    )

def config_to_dict(config: SeatingConfig) -> Dict[str, Any]:
    def seat(s: SeatCoordinate) -> List[int]:
        return [s.row + 1, s.column + 1]

    return {
        "row_count": config.rows,
        "column_count": config.columns,
        "names": list(config.roster),
        "disabled_seats": [seat(s) for s in sorted(config.disabled_seats)],
        "separate_list": [str(p) for p in config.separation_pairs],
        "eligibility": {
            name: {"seats": [seat(s) for s in sorted(seats)]}
            for name, seats in config.eligibility.items()
        },
        "group_leader_list": list(config.group_leaders),
        "seed": config.seed,
        "max_attempts": config.max_attempts,
        "random_between_rows": config.random_between_rows,
        "lucky_option": config.lucky,
    }


def load_seating_config(filepath: str) -> Optional[SeatingConfig]:
    """
    Reads a seating config JSON file.
    Returns None if the file does not exist.
    """
    print(f"Loading seating config from {filepath}...")

    if not os.path.exists(filepath):
        print(f"Fatal Error: Config file not found at {filepath}")
        return None

    with open(filepath, mode='r', encoding='utf-8-sig') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Config file {filepath} is not valid JSON: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {filepath} must contain a JSON object")

    config = config_from_dict(data)
    print(f"Successfully loaded config: {config.rows}x{config.columns} grid, {len(config.roster)} students.")
    return config

def save_seating_config(config: SeatingConfig, filepath: str) -> None:
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(filepath, mode='w', encoding='utf-8') as f:
        json.dump(config_to_dict(config), f, ensure_ascii=False, indent=2)
    print(f"Saved seating config to {filepath}")

def load_roster_csv(filepath: str) -> List[str]:
    """
    Reads names from a CSV file with a 'Name' column.
    Blank rows are skipped; returns [] if the file is missing.
    """
    print(f"Loading roster from {filepath}...")
    names = []

    if not os.path.exists(filepath):
        print(f"Fatal Error: Roster file not found at {filepath}")
        return []

    with open(filepath, mode='r', encoding='utf-8-sig', newline='') as f:
        reader = csv.DictReader(f)
        fieldnames = {name.strip().lower(): name for name in reader.fieldnames or []}
        if "name" not in fieldnames:
            raise ConfigError(f"Roster file {filepath} has no 'Name' column")
        column = fieldnames["name"]
        for row in reader:
            name = (row.get(column) or "").strip()
            if name:
                names.append(name)

    print(f"Successfully loaded {len(names)} students.")
    return names
