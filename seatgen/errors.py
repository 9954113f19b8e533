"""
seatgen/errors.py
"""

from typing import List


class GenerationError(Exception):
    """Base class for everything `generate` can raise."""


class ConfigError(GenerationError, ValueError):
    """
    A structural problem with the seating config.
    Raised before any attempt is made; never retried.
    """

    def __init__(self, problems):
        if isinstance(problems, str):
            problems = [problems]
        self.problems: List[str] = list(problems)
        super().__init__("; ".join(self.problems))


class ArrangementUnsatisfiable(GenerationError):
    """
    Every bounded attempt produced violations.
    This is not a proof that no arrangement exists.
    """

    def __init__(self, attempts: int, violations):
        self.attempts = attempts
        self.violations = list(violations)
        summary = "; ".join(v.message for v in self.violations[:3])
        if len(self.violations) > 3:
            summary += f" (+{len(self.violations) - 3} more)"
        super().__init__(
            f"No valid arrangement found after {attempts} attempts. Last attempt: {summary}"
        )
