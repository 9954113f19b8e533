"""
seatgen
Random classroom seat arrangement generator.
"""

from .errors import GenerationError, ConfigError, ArrangementUnsatisfiable
from .models import SeatCoordinate, SeparationPair, SeatingConfig, Arrangement
from .seed import derive_seed
from .arranger import generate, SeatArranger

__all__ = [
    "GenerationError",
    "ConfigError",
    "ArrangementUnsatisfiable",
    "SeatCoordinate",
    "SeparationPair",
    "SeatingConfig",
    "Arrangement",
    "derive_seed",
    "generate",
    "SeatArranger",
]
