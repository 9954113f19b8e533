"""
seatgen/grid.py

Static classroom geometry: which seats exist, which are usable,
and which seats count as "next to" each other.
"""

from typing import Iterable, List, Tuple, FrozenSet
from .models import SeatCoordinate, SeatingConfig
from .errors import ConfigError


class SeatGrid:
    """
    A rows x columns grid of seats with some seats disabled.

    Adjacency is the 8-neighbourhood: two different seats are adjacent
    when they are at most one row and at most one column apart. This
    covers the desk-mate beside, the seats directly in front/behind and
    the diagonals.
    """

    def __init__(self, rows: int, columns: int, disabled: Iterable = ()):
        if rows <= 0 or columns <= 0:
            raise ConfigError(f"Grid must have positive dimensions, got {rows}x{columns}")

        self.rows = rows
        self.columns = columns
        self.disabled: FrozenSet[SeatCoordinate] = frozenset(SeatCoordinate(*s) for s in disabled)

        out_of_bounds = sorted(s for s in self.disabled if not self.contains(s))
        if out_of_bounds:
            labels = ", ".join(f"({s.row}, {s.column})" for s in out_of_bounds)
            raise ConfigError(f"Disabled seats outside the {rows}x{columns} grid: {labels}")

        # Row-major so that a given seed always sees seats in the same order.
        self.usable_seats: Tuple[SeatCoordinate, ...] = tuple(
            SeatCoordinate(r, c)
            for r in range(rows)
            for c in range(columns)
            if SeatCoordinate(r, c) not in self.disabled
        )
        self._usable_lookup = frozenset(self.usable_seats)

    @classmethod
    def from_config(cls, config: SeatingConfig) -> "SeatGrid":
        grid = cls(config.rows, config.columns, config.disabled_seats)
        if not grid.usable_seats and config.roster:
            raise ConfigError("Grid has no usable seats but the roster is not empty")
        return grid

    @property
    def capacity(self) -> int:
        return len(self.usable_seats)

    def contains(self, seat) -> bool:
        row, column = seat
        return 0 <= row < self.rows and 0 <= column < self.columns

    def is_usable(self, seat) -> bool:
        return SeatCoordinate(*seat) in self._usable_lookup

    def adjacent(self, a, b) -> bool:
        a, b = SeatCoordinate(*a), SeatCoordinate(*b)
        if a == b:
            return False
        return abs(a.row - b.row) <= 1 and abs(a.column - b.column) <= 1

    def neighbours(self, seat) -> List[SeatCoordinate]:
        """In-bounds adjacent seats, usable or not, row-major."""
        seat = SeatCoordinate(*seat)
        result = []
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                other = SeatCoordinate(seat.row + dr, seat.column + dc)
                if other != seat and self.contains(other):
                    result.append(other)
        return result

    def seats_in_rows(self, rows: Iterable[int]) -> FrozenSet[SeatCoordinate]:
        """Usable seats in the given rows, e.g. to keep someone at the front."""
        wanted = set(rows)
        return frozenset(s for s in self.usable_seats if s.row in wanted)

    def seats_in_columns(self, columns: Iterable[int]) -> FrozenSet[SeatCoordinate]:
        wanted = set(columns)
        return frozenset(s for s in self.usable_seats if s.column in wanted)

    def seats_excluding_rows(self, rows: Iterable[int]) -> FrozenSet[SeatCoordinate]:
        """Usable seats outside the given rows, e.g. no front row for tall students."""
        unwanted = set(rows)
        return frozenset(s for s in self.usable_seats if s.row not in unwanted)

    def seats_excluding_columns(self, columns: Iterable[int]) -> FrozenSet[SeatCoordinate]:
        unwanted = set(columns)
        return frozenset(s for s in self.usable_seats if s.column not in unwanted)

    def __eq__(self, other):
        if not isinstance(other, SeatGrid):
            return NotImplemented
        return (self.rows, self.columns, self.disabled) == (other.rows, other.columns, other.disabled)

    def __hash__(self):
        return hash((self.rows, self.columns, self.disabled))

    def __repr__(self):
        return f"SeatGrid({self.rows}x{self.columns}, {self.capacity} usable)"
