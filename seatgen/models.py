"""
seatgen/models.py

Immutable value types passed through the generation pipeline:
config in, candidates in the middle, an arrangement out.
"""

from typing import List, Optional, Dict, Tuple, FrozenSet, Mapping, NamedTuple, Union, TYPE_CHECKING
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
import pandas as pd
from . import utils

if TYPE_CHECKING:
    from .grid import SeatGrid


class SeatCoordinate(NamedTuple):
    """A (row, column) seat position, 0-indexed. Row 0 is the front."""
    row: int
    column: int

    @property
    def label(self) -> str:
        return utils.seat_label(self.row, self.column)


def _as_coordinates(seats) -> FrozenSet[SeatCoordinate]:
    return frozenset(SeatCoordinate(*s) for s in seats)


@dataclass(frozen=True, eq=False)
class SeparationPair:
    """
    Two students who must not sit next to each other.
    Unordered: SeparationPair("a", "b") == SeparationPair("b", "a").
    """
    first: str
    second: str

    @property
    def names(self) -> FrozenSet[str]:
        return frozenset((self.first, self.second))

    def __eq__(self, other):
        if not isinstance(other, SeparationPair):
            return NotImplemented
        return self.names == other.names

    def __hash__(self):
        return hash(self.names)

    def __iter__(self):
        return iter((self.first, self.second))

    def __str__(self):
        return f"{self.first} {self.second}"


@dataclass(frozen=True)
class SeatingConfig:
    """
    Everything needed to generate one arrangement.
    Structural checks live in validators.validate_config so that all
    problems can be reported together.
    """
    rows: int
    columns: int
    roster: Tuple[str, ...]
    disabled_seats: FrozenSet[SeatCoordinate] = frozenset()
    separation_pairs: Tuple[SeparationPair, ...] = ()
    eligibility: Mapping[str, FrozenSet[SeatCoordinate]] = field(default_factory=dict)
    group_leaders: Tuple[str, ...] = ()
    seed: Optional[Union[int, str]] = None
    max_attempts: int = utils.DEFAULT_MAX_ATTEMPTS
    random_between_rows: Optional[int] = None
    lucky: bool = False

    def __post_init__(self):
        """Normalises collections so the snapshot can't be mutated later."""
        object.__setattr__(self, "roster", tuple(self.roster))
        object.__setattr__(self, "disabled_seats", _as_coordinates(self.disabled_seats))
        object.__setattr__(self, "separation_pairs", tuple(
            p if isinstance(p, SeparationPair) else SeparationPair(*p)
            for p in self.separation_pairs
        ))
        object.__setattr__(self, "eligibility", MappingProxyType({
            name: _as_coordinates(seats) for name, seats in dict(self.eligibility).items()
        }))
        object.__setattr__(self, "group_leaders", tuple(self.group_leaders))
        object.__setattr__(self, "lucky", bool(self.lucky))

    @property
    def seat_count(self) -> int:
        return self.rows * self.columns

    @property
    def block_size(self) -> int:
        """Roster names shuffled together; the whole roster when row bands are off."""
        if not self.random_between_rows:
            return max(len(self.roster), 1)
        return self.columns * self.random_between_rows

    def roster_blocks(self) -> List[Tuple[str, ...]]:
        """
        The roster cut, in order, into blocks of `block_size` names.
        Block i keeps to the rows of band i.
        """
        size = self.block_size
        return [self.roster[i:i + size] for i in range(0, len(self.roster), size)]

    def band_rows(self, block: int) -> range:
        if not self.random_between_rows:
            return range(self.rows)
        start = block * self.random_between_rows
        return range(start, min(start + self.random_between_rows, self.rows))

    def allowed_seats(self, name: str, grid: "SeatGrid") -> FrozenSet[SeatCoordinate]:
        """
        The seats `name` may take: their eligibility rule (all usable seats
        when unrestricted), narrowed to their row band when bands are on.
        """
        allowed = self.eligibility.get(name, frozenset(grid.usable_seats))
        if self.random_between_rows and name in self.roster:
            block = self.roster.index(name) // self.block_size
            allowed = allowed & grid.seats_in_rows(self.band_rows(block))
        return allowed

    def with_seed(self, seed: Optional[Union[int, str]]) -> "SeatingConfig":
        return replace(self, seed=seed)


@dataclass(frozen=True)
class Candidate:
    """
    One trial assignment of the roster to seats, not yet validated.
    `lucky` is the student drawn to stay unseated, if any.
    """
    assignment: Mapping[str, SeatCoordinate]
    attempt: int = 0
    lucky: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "assignment", MappingProxyType({
            name: SeatCoordinate(*seat) for name, seat in dict(self.assignment).items()
        }))

    def seat_of(self, name: str) -> Optional[SeatCoordinate]:
        return self.assignment.get(name)

    def occupant(self, seat: SeatCoordinate) -> Optional[str]:
        for name, assigned in self.assignment.items():
            if assigned == seat:
                return name
        return None

    @property
    def occupied_seats(self) -> List[SeatCoordinate]:
        return list(self.assignment.values())


class ViolationKind(Enum):
    CAPACITY = "capacity"
    ELIGIBILITY = "eligibility"
    SEPARATION = "separation"
    GROUP_LEADER = "group_leader"


@dataclass(frozen=True)
class Violation:
    """A single broken rule found in a candidate."""
    kind: ViolationKind
    students: Tuple[str, ...]
    message: str
    seat: Optional[SeatCoordinate] = None

    def __str__(self):
        return f"[{self.kind.value}] {self.message}"


@dataclass(frozen=True)
class Arrangement:
    """
    The accepted seat assignment and how it was produced.
    `attempts` is the number of attempts consumed, including the accepted one.
    """
    assignment: Mapping[str, SeatCoordinate]
    seed: int
    attempts: int
    config: SeatingConfig
    seed_label: str = ""
    leaders: Tuple[str, ...] = ()
    lucky: Optional[str] = None
    grid: Optional["SeatGrid"] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "assignment", MappingProxyType({
            name: SeatCoordinate(*seat) for name, seat in dict(self.assignment).items()
        }))
        object.__setattr__(self, "leaders", tuple(self.leaders))

    def seat_of(self, name: str) -> Optional[SeatCoordinate]:
        return self.assignment.get(name)

    def occupant(self, seat: SeatCoordinate) -> Optional[str]:
        return self._seat_index().get(SeatCoordinate(*seat))

    def _seat_index(self) -> Dict[SeatCoordinate, str]:
        return {seat: name for name, seat in self.assignment.items()}

    def rows_as_names(self, placeholder: str = utils.EMPTY_SEAT_PLACEHOLDER) -> List[List[str]]:
        """Grid of display names, front row first; leaders shown as *name*."""
        index = self._seat_index()
        leaders = set(self.leaders)
        rows = []
        for r in range(self.config.rows):
            row = []
            for c in range(self.config.columns):
                name = index.get(SeatCoordinate(r, c))
                if name is None:
                    row.append(placeholder)
                elif name in leaders:
                    row.append(utils.format_leader(name))
                else:
                    row.append(name)
            rows.append(row)
        return rows

    def to_dataframe(self, placeholder: str = utils.EMPTY_SEAT_PLACEHOLDER) -> pd.DataFrame:
        return pd.DataFrame(
            self.rows_as_names(placeholder),
            index=[utils.row_label(r) for r in range(self.config.rows)],
            columns=[utils.column_label(c) for c in range(self.config.columns)],
        )

    def as_dict(self) -> Dict:
        """JSON-friendly view used by the web API."""
        return {
            "seed": self.seed,
            "seed_label": self.seed_label,
            "attempts": self.attempts,
            "rows": self.config.rows,
            "columns": self.config.columns,
            "leaders": list(self.leaders),
            "lucky": self.lucky,
            "assignment": {
                name: [seat.row, seat.column] for name, seat in self.assignment.items()
            },
            "grid": self.rows_as_names(),
        }

    def __str__(self):
        return utils.format_arrangement(self)
