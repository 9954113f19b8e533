"""
seatgen/utils.py
"""
import re
from typing import List, Tuple, Union

# --- Generation Constants ---
DEFAULT_MAX_ATTEMPTS: int = 1000
ATTEMPT_BATCH_SIZE: int = 32  # attempts submitted per round when running in parallel
SEED_DIGEST_BYTES: int = 8   # 64-bit seeds
SEED_MODULUS: int = 2 ** 64

# --- Grid Constants ---
MAX_COLUMN_COUNT: int = 20

# --- Display Constants ---
EMPTY_SEAT_PLACEHOLDER: str = "-"
GROUP_LEADER_FORMAT: str = "*{}*"
GROUP_LEADER_PATTERN = re.compile(r"\*.*\*")
FRONT_LABEL: str = "FRONT"


def column_label(index: int) -> str:
    return f"Column {index + 1}"

def row_label(index: int) -> str:
    return f"Row {index + 1}"

def seat_label(row: int, column: int) -> str:
    """0-indexed coordinates -> 1-indexed 'R1C1' text."""
    return f"R{row + 1}C{column + 1}"

def parse_seat_label(text: str) -> Tuple[int, int]:
    """
    Parses 'R2C3', '2,3' or '2 3' (all 1-indexed) into a
    0-indexed (row, column) tuple. Returns (-1, -1) if unparseable.
    """
    match = re.fullmatch(r"\s*[Rr]?\s*(\d+)\s*(?:[Cc]|,|\s)\s*(\d+)\s*", text)
    if not match:
        return (-1, -1)
    return (int(match.group(1)) - 1, int(match.group(2)) - 1)

def parse_name_list(value: Union[str, List[str], None]) -> List[str]:
    """Accepts a space-separated string or a list; strips blanks."""
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return [str(v).strip() for v in value if str(v).strip()]

def is_group_leader_format(name: str) -> bool:
    return GROUP_LEADER_PATTERN.fullmatch(name) is not None

def format_leader(name: str) -> str:
    return GROUP_LEADER_FORMAT.format(name)

def format_arrangement(arrangement, seat_separator: str = "\t", line_separator: str = "\n") -> str:
    """
    Renders an Arrangement as plain text: a header of column labels,
    one line per grid row, the lucky person if any, then the seed.
    """
    columns = arrangement.config.columns
    lines = [seat_separator.join(column_label(c) for c in range(columns))]
    for row in arrangement.rows_as_names():
        lines.append(seat_separator.join(row))
    if arrangement.lucky:
        lines.append(f"Lucky: {arrangement.lucky}")
    lines.append(f"Seed: {arrangement.seed_label}")
    return line_separator.join(lines)
