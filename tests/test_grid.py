"""
tests/test_grid.py
"""
import pytest
from seatgen.grid import SeatGrid
from seatgen.models import SeatCoordinate, SeatingConfig
from seatgen.errors import ConfigError


def test_usable_seats_are_row_major_without_disabled():
    grid = SeatGrid(2, 3, disabled=[(0, 1)])
    assert grid.usable_seats == (
        SeatCoordinate(0, 0), SeatCoordinate(0, 2),
        SeatCoordinate(1, 0), SeatCoordinate(1, 1), SeatCoordinate(1, 2),
    )
    assert grid.capacity == 5
    assert not grid.is_usable((0, 1))
    assert grid.is_usable((1, 1))
    assert not grid.is_usable((5, 5))

def test_adjacency_is_the_eight_neighbourhood():
    grid = SeatGrid(4, 4)
    centre = (1, 1)
    # beside, in front/behind, diagonals
    for other in [(1, 0), (1, 2), (0, 1), (2, 1), (0, 0), (0, 2), (2, 0), (2, 2)]:
        assert grid.adjacent(centre, other)
        assert grid.adjacent(other, centre)
    # two apart in any direction is fine
    for other in [(1, 3), (3, 1), (3, 3), (3, 0)]:
        assert not grid.adjacent(centre, other)
    # a seat is not its own neighbour
    assert not grid.adjacent(centre, centre)

def test_no_adjacency_across_row_wrap():
    # last seat of row 0 and first seat of row 1 are far apart
    grid = SeatGrid(2, 4)
    assert not grid.adjacent((0, 3), (1, 0))

def test_neighbours():
    grid = SeatGrid(3, 3)
    assert len(grid.neighbours((0, 0))) == 3
    assert len(grid.neighbours((1, 1))) == 8
    assert len(grid.neighbours((0, 1))) == 5
    assert (0, 0) not in grid.neighbours((0, 0))

def test_out_of_bounds_disabled_seat_is_rejected():
    with pytest.raises(ConfigError):
        SeatGrid(2, 2, disabled=[(2, 0)])
    with pytest.raises(ConfigError):
        SeatGrid(2, 2, disabled=[(0, -1)])

def test_non_positive_dimensions_are_rejected():
    with pytest.raises(ConfigError):
        SeatGrid(0, 3)

def test_from_config_rejects_empty_grid_with_students():
    config = SeatingConfig(rows=1, columns=2, roster=["a"], disabled_seats={(0, 0), (0, 1)})
    with pytest.raises(ConfigError):
        SeatGrid.from_config(config)

    empty = SeatingConfig(rows=1, columns=2, roster=[], disabled_seats={(0, 0), (0, 1)})
    assert SeatGrid.from_config(empty).capacity == 0

def test_row_and_column_helpers():
    grid = SeatGrid(3, 2, disabled=[(2, 1)])
    assert grid.seats_in_rows([0]) == {(0, 0), (0, 1)}
    assert grid.seats_excluding_rows([0]) == {(1, 0), (1, 1), (2, 0)}
    assert grid.seats_in_columns([1]) == {(0, 1), (1, 1)}
    assert grid.seats_excluding_columns([1]) == {(0, 0), (1, 0), (2, 0)}

def test_grid_equality():
    assert SeatGrid(2, 2, [(0, 0)]) == SeatGrid(2, 2, [(0, 0)])
    assert SeatGrid(2, 2) != SeatGrid(2, 3)
