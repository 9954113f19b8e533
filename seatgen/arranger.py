"""
seatgen/arranger.py

The generate -> validate retry loop.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Dict, Optional, Iterator, NamedTuple
from .models import Arrangement, Candidate, SeatingConfig, Violation, ViolationKind
from .grid import SeatGrid
from .generator import CandidateGenerator
from .validators import validate_config, check_candidate
from .errors import ArrangementUnsatisfiable
from .seed import derive_seed, describe_seed, leader_rng
from . import utils


class AttemptResult(NamedTuple):
    attempt: int
    candidate: Candidate
    violations: List[Violation]

    @property
    def valid(self) -> bool:
        return not self.violations


class SeatArranger:
    """
    Drives up to `config.max_attempts` generate/validate rounds.

    Construction does all the up-front work (config validation, grid,
    seed) and raises ConfigError before any attempt. Each attempt index
    draws from its own random stream, so the result depends only on the
    config, the seed and the context token, never on `workers`.
    """

    def __init__(self, config: SeatingConfig, context_token: Optional[str] = None, workers: int = 1):
        validate_config(config)
        self.config = config
        self.grid = SeatGrid.from_config(config)
        self.seed = derive_seed(config.seed, context_token)
        self.seed_label = describe_seed(config.seed)
        if self.seed_label == "(derived)":
            self.seed_label = f"{self.seed} (derived)"
        self.workers = max(1, workers)
        self.generator = CandidateGenerator(self.grid, config)

    def _evaluate(self, attempt: int) -> AttemptResult:
        candidate = self.generator.generate(self.seed, attempt)
        violations = check_candidate(candidate, self.config, self.grid)
        broken = [v for v in violations if v.kind == ViolationKind.CAPACITY]
        if broken:
            raise AssertionError(
                f"Generator produced a structurally invalid candidate on attempt {attempt}: {broken[0].message}"
            )
        return AttemptResult(attempt, candidate, violations)

    def attempts(self) -> Iterator[AttemptResult]:
        """
        Lazily yields every attempt in index order. Stop iterating at
        any point to abandon the search; nothing leaks out.
        """
        for attempt in range(self.config.max_attempts):
            yield self._evaluate(attempt)

    def _parallel_attempts(self) -> Iterator[AttemptResult]:
        """
        Same sequence as attempts(), evaluated a batch at a time on a
        thread pool. Results come back in index order so the lowest
        valid index still wins.
        """
        batch_size = max(utils.ATTEMPT_BATCH_SIZE, self.workers)
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            for start in range(0, self.config.max_attempts, batch_size):
                stop = min(start + batch_size, self.config.max_attempts)
                futures = [pool.submit(self._evaluate, i) for i in range(start, stop)]
                try:
                    for future in futures:
                        yield future.result()
                finally:
                    for future in futures:
                        future.cancel()

    def run(self) -> Arrangement:
        print(f"\n--- GENERATING SEAT ARRANGEMENT: {len(self.config.roster)} students, "
              f"{self.grid.capacity} seats, seed {self.seed_label} ---")

        results = self._parallel_attempts() if self.workers > 1 else self.attempts()
        last: Optional[AttemptResult] = None
        for result in results:
            last = result
            if result.valid:
                results.close()
                print(f"--- ACCEPTED ATTEMPT {result.attempt + 1} ---")
                return self._accept(result)

        attempts_made = last.attempt + 1 if last else 0
        print(f"  Failed: no valid arrangement in {attempts_made} attempts.")
        raise ArrangementUnsatisfiable(attempts_made, last.violations if last else [])

    def _accept(self, result: AttemptResult) -> Arrangement:
        return Arrangement(
            assignment=result.candidate.assignment,
            seed=self.seed,
            attempts=result.attempt + 1,
            config=self.config,
            seed_label=self.seed_label,
            leaders=self._pick_leaders(result),
            lucky=result.candidate.lucky,
            grid=self.grid,
        )

    def _pick_leaders(self, result: AttemptResult) -> tuple:
        """
        One leader per occupied column, chosen among the leaders sitting
        there. A lucky leader has no seat and is skipped.
        """
        if not self.config.group_leaders:
            return ()
        rng = leader_rng(self.seed, result.attempt)
        by_column: Dict[int, List[str]] = {}
        for name in self.config.group_leaders:
            seat = result.candidate.seat_of(name)
            if seat is None:
                continue
            by_column.setdefault(seat.column, []).append(name)

        leaders = []
        for column in sorted(by_column):
            candidates = sorted(by_column[column], key=lambda n: result.candidate.seat_of(n))
            leaders.append(rng.choice(candidates))
        return tuple(leaders)


def generate(config: SeatingConfig, context_token: Optional[str] = None, workers: int = 1) -> Arrangement:
    """
    Builds one arrangement for `config`.

    Raises ConfigError if the config is structurally broken (no attempts
    made) or ArrangementUnsatisfiable if every attempt failed.
    """
    return SeatArranger(config, context_token=context_token, workers=workers).run()
