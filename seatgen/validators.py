"""
seatgen/validators.py

Config checks (run once, before generation) and candidate checks
(run on every attempt).
"""

from typing import List, Dict, Optional, Set
from .models import Candidate, SeatingConfig, SeatCoordinate, Violation, ViolationKind
from .grid import SeatGrid
from .errors import ConfigError
from . import utils


def validate_config(config: SeatingConfig) -> None:
    """
    Raises ConfigError listing every structural problem in the config.
    """
    problems: List[str] = []

    problems.extend(_check_dimensions(config))
    if problems:
        # Everything below needs a sane grid.
        raise ConfigError(problems)

    problems.extend(_check_disabled_seats(config))
    problems.extend(_check_roster(config))
    problems.extend(_check_capacity(config))
    problems.extend(_check_separation_pairs(config))
    problems.extend(_check_eligibility(config))
    problems.extend(_check_group_leaders(config))
    problems.extend(_check_row_bands(config))

    if config.max_attempts < 1:
        problems.append(f"max_attempts must be at least 1, got {config.max_attempts}")

    if problems:
        raise ConfigError(problems)

def _check_dimensions(config: SeatingConfig) -> List[str]:
    problems = []
    if config.rows <= 0:
        problems.append(f"Row count must be positive, got {config.rows}")
    if config.columns <= 0:
        problems.append(f"Column count must be positive, got {config.columns}")
    elif config.columns > utils.MAX_COLUMN_COUNT:
        problems.append(f"Column count cannot be larger than {utils.MAX_COLUMN_COUNT}, got {config.columns}")
    return problems

def _in_bounds(config: SeatingConfig, seat: SeatCoordinate) -> bool:
    return 0 <= seat.row < config.rows and 0 <= seat.column < config.columns

def _check_disabled_seats(config: SeatingConfig) -> List[str]:
    problems = []
    for seat in sorted(config.disabled_seats):
        if not _in_bounds(config, seat):
            problems.append(f"Disabled seat ({seat.row}, {seat.column}) is outside the {config.rows}x{config.columns} grid")
    return problems

def _check_roster(config: SeatingConfig) -> List[str]:
    problems = []
    seen: Set[str] = set()
    for name in config.roster:
        if not name or not name.strip():
            problems.append("Roster must not contain empty names")
            continue
        if name == utils.EMPTY_SEAT_PLACEHOLDER:
            problems.append(f"Roster must not contain the empty seat placeholder \"{utils.EMPTY_SEAT_PLACEHOLDER}\"")
        if utils.is_group_leader_format(name):
            problems.append(f"Roster name \"{name}\" is in the group leader display format")
        if name in seen:
            problems.append(f"Duplicate roster name: \"{name}\"")
        seen.add(name)
    return problems

def _usable_count(config: SeatingConfig) -> int:
    in_bounds_disabled = [s for s in config.disabled_seats if _in_bounds(config, s)]
    return config.seat_count - len(in_bounds_disabled)

def _seated_count(config: SeatingConfig) -> int:
    """Roster size minus the lucky person, who never takes a seat."""
    if config.lucky and config.roster:
        return len(config.roster) - 1
    return len(config.roster)

def _check_capacity(config: SeatingConfig) -> List[str]:
    usable = _usable_count(config)
    seated = _seated_count(config)
    if seated > usable:
        return [f"Too many students: {seated} to seat but only {usable} usable seats"]
    return []

def _check_separation_pairs(config: SeatingConfig) -> List[str]:
    problems = []
    roster = set(config.roster)
    for pair in config.separation_pairs:
        if pair.first == pair.second:
            problems.append(f"Separation pair names the same student twice: \"{pair.first}\"")
            continue
        for name in pair:
            if name not in roster:
                problems.append(f"Separation pair \"{pair}\" references unknown student \"{name}\"")
    return problems

def _check_eligibility(config: SeatingConfig) -> List[str]:
    problems = []
    roster = set(config.roster)
    for name, seats in config.eligibility.items():
        if name not in roster:
            problems.append(f"Eligibility rule references unknown student \"{name}\"")
            continue
        if not seats:
            problems.append(f"Eligibility rule for \"{name}\" allows no seats")
            continue
        for seat in sorted(seats):
            if not _in_bounds(config, seat):
                problems.append(f"Eligibility rule for \"{name}\" allows out-of-bounds seat ({seat.row}, {seat.column})")
            elif seat in config.disabled_seats:
                problems.append(f"Eligibility rule for \"{name}\" allows disabled seat {seat.label}")
    return problems

def _check_group_leaders(config: SeatingConfig) -> List[str]:
    roster = set(config.roster)
    return [
        f"Group leader \"{name}\" is not on the roster"
        for name in config.group_leaders if name not in roster
    ]

def _check_row_bands(config: SeatingConfig) -> List[str]:
    """Each roster block must fit into the usable seats of its row band."""
    if config.random_between_rows is None:
        return []
    if config.random_between_rows < 1:
        return [f"random_between_rows must be at least 1, got {config.random_between_rows}"]

    problems = []
    blocks = config.roster_blocks()
    for i, block in enumerate(blocks):
        rows = config.band_rows(i)
        band = [utils.row_label(r) for r in rows]
        seats = {
            SeatCoordinate(r, c) for r in rows for c in range(config.columns)
        } - config.disabled_seats
        needed = len(block)
        if config.lucky and i == len(blocks) - 1:
            needed -= 1
        if needed > len(seats):
            where = ", ".join(band) if band else "rows past the back of the grid"
            problems.append(f"Roster block {i + 1} has {needed} students but only {len(seats)} usable seats in {where}")
            continue
        if not band:
            continue
        for name in block:
            if name in config.eligibility and not config.eligibility[name] & seats:
                problems.append(f"Eligibility rule for \"{name}\" allows no seat in {', '.join(band)}")
    return problems


def check_candidate(candidate: Candidate, config: SeatingConfig, grid: SeatGrid) -> List[Violation]:
    """
    Returns every violation in the candidate, capacity first, then
    eligibility, separation and group leaders. Empty list means valid.
    """
    violations: List[Violation] = []
    violations.extend(_check_capacity_violations(candidate, config, grid))
    if violations:
        # The remaining rules assume everyone has exactly one seat.
        return violations
    violations.extend(_check_eligibility_violations(candidate, config, grid))
    violations.extend(_check_separation_violations(candidate, config, grid))
    violations.extend(_check_group_leader_violations(candidate, config, grid))
    return violations

def is_valid(candidate: Candidate, config: SeatingConfig, grid: SeatGrid) -> bool:
    return not check_candidate(candidate, config, grid)

def first_violation(candidate: Candidate, config: SeatingConfig, grid: SeatGrid) -> Optional[Violation]:
    violations = check_candidate(candidate, config, grid)
    return violations[0] if violations else None

def _check_capacity_violations(candidate: Candidate, config: SeatingConfig, grid: SeatGrid) -> List[Violation]:
    violations = []
    if candidate.lucky is not None and (not config.lucky or candidate.lucky not in config.roster):
        violations.append(Violation(
            ViolationKind.CAPACITY, (candidate.lucky,), f"{candidate.lucky} cannot be the lucky person"
        ))
    for name in config.roster:
        seat = candidate.seat_of(name)
        if name == candidate.lucky:
            if seat is not None:
                violations.append(Violation(
                    ViolationKind.CAPACITY, (name,), f"Lucky person {name} is seated", seat
                ))
        elif seat is None:
            violations.append(Violation(
                ViolationKind.CAPACITY, (name,), f"{name} has no seat"
            ))

    roster = set(config.roster)
    taken: Dict[SeatCoordinate, str] = {}
    for name, seat in candidate.assignment.items():
        if name not in roster:
            violations.append(Violation(
                ViolationKind.CAPACITY, (name,), f"{name} is seated but not on the roster", seat
            ))
        if not grid.is_usable(seat):
            violations.append(Violation(
                ViolationKind.CAPACITY, (name,), f"{name} is seated at unusable seat {seat.label}", seat
            ))
        if seat in taken:
            violations.append(Violation(
                ViolationKind.CAPACITY, (taken[seat], name),
                f"{taken[seat]} and {name} share seat {seat.label}", seat
            ))
        else:
            taken[seat] = name
    return violations

def _check_eligibility_violations(candidate: Candidate, config: SeatingConfig, grid: SeatGrid) -> List[Violation]:
    violations = []
    for name, seat in candidate.assignment.items():
        if seat not in config.allowed_seats(name, grid):
            violations.append(Violation(
                ViolationKind.ELIGIBILITY, (name,),
                f"{name} may not sit at {seat.label}", seat
            ))
    return violations

def _check_separation_violations(candidate: Candidate, config: SeatingConfig, grid: SeatGrid) -> List[Violation]:
    violations = []
    for pair in config.separation_pairs:
        seat_a = candidate.seat_of(pair.first)
        seat_b = candidate.seat_of(pair.second)
        if seat_a is None or seat_b is None:
            # one of them is the lucky person
            continue
        if grid.adjacent(seat_a, seat_b):
            violations.append(Violation(
                ViolationKind.SEPARATION, (pair.first, pair.second),
                f"{pair.first} ({seat_a.label}) and {pair.second} ({seat_b.label}) sit next to each other",
                seat_b
            ))
    return violations

def _check_group_leader_violations(candidate: Candidate, config: SeatingConfig, grid: SeatGrid) -> List[Violation]:
    """Every column with someone in it needs at least one group leader."""
    if not config.group_leaders:
        return []

    leaders = set(config.group_leaders)
    occupied_columns: Set[int] = set()
    led_columns: Set[int] = set()
    for name, seat in candidate.assignment.items():
        occupied_columns.add(seat.column)
        if name in leaders:
            led_columns.add(seat.column)

    violations = []
    for column in sorted(occupied_columns - led_columns):
        students = tuple(
            name for name, seat in candidate.assignment.items() if seat.column == column
        )
        violations.append(Violation(
            ViolationKind.GROUP_LEADER, students,
            f"{utils.column_label(column)} has no group leader"
        ))
    return violations
