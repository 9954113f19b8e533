"""
tests/conftest.py

Shared configs for the test suite.
"""
import pytest
from seatgen.models import SeatingConfig, SeatCoordinate, SeparationPair


@pytest.fixture
def roster():
    return [f"S{i:02d}" for i in range(10)]

@pytest.fixture
def basic_config(roster) -> SeatingConfig:
    """4x4 room, 10 students, no rules."""
    return SeatingConfig(rows=4, columns=4, roster=roster, seed=42)

@pytest.fixture
def ruled_config(roster) -> SeatingConfig:
    """4x4 room with two broken seats, two separated pairs and two seat rules."""
    return SeatingConfig(
        rows=4,
        columns=4,
        roster=roster,
        disabled_seats={(3, 0), (3, 3)},
        separation_pairs=[("S00", "S01"), SeparationPair("S02", "S03")],
        eligibility={
            # S04 is tall: never the front row
            "S04": {SeatCoordinate(r, c) for r in range(1, 4) for c in range(4)} - {(3, 0), (3, 3)},
            # S05 needs to be at the front
            "S05": {(0, c) for c in range(4)},
        },
        seed="ruled",
    )
