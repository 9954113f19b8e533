"""
seatgen/generator.py
"""

import random
from typing import Dict, List, Optional, Sequence, Tuple
from .models import Candidate, SeatCoordinate, SeatingConfig
from .grid import SeatGrid
from .seed import attempt_rng


def generate_candidate(usable_seats: Sequence[SeatCoordinate],
                       roster: Sequence[str],
                       rng: random.Random,
                       attempt: int = 0) -> Candidate:
    """
    Seats the roster uniformly at random.
    Shuffles a copy of the usable seats and gives roster[i] the i-th
    shuffled seat; leftover seats stay empty. Rule checking is left to
    the validator.
    """
    seats = list(usable_seats)
    rng.shuffle(seats)
    return Candidate(
        assignment={name: seats[i] for i, name in enumerate(roster)},
        attempt=attempt,
    )


class CandidateGenerator:
    """
    Binds a grid and config; stateless between calls.

    Each roster block is shuffled over the usable seats of its row band
    (one block over the whole grid when bands are off). With `lucky` on,
    one name from the last block is drawn first and left unseated.
    """

    def __init__(self, grid: SeatGrid, config: SeatingConfig):
        self.grid = grid
        self.config = config
        self.pools: List[Tuple[Tuple[str, ...], Tuple[SeatCoordinate, ...]]] = [
            (block, tuple(sorted(grid.seats_in_rows(config.band_rows(i)))))
            for i, block in enumerate(config.roster_blocks())
        ]

    def _draw_lucky(self, rng: random.Random) -> Optional[str]:
        if not self.config.lucky or not self.pools:
            return None
        return rng.choice(self.pools[-1][0])

    def generate(self, seed: int, attempt: int) -> Candidate:
        rng = attempt_rng(seed, attempt)
        lucky = self._draw_lucky(rng)
        assignment: Dict[str, SeatCoordinate] = {}
        for names, seats in self.pools:
            seated = [name for name in names if name != lucky]
            assignment.update(generate_candidate(seats, seated, rng, attempt).assignment)
        return Candidate(assignment, attempt, lucky)
