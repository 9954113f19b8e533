"""
seatgen/seed.py

Turns whatever the user typed into the seed box (or nothing) into a
64-bit integer, and hands out one random stream per attempt.
"""

import hashlib
import random
from datetime import date, datetime
from typing import Optional, Union
from . import utils

SeedValue = Optional[Union[int, str]]


def _digest(text: str) -> int:
    # hash() is salted per interpreter run, so it can't be used for seeds.
    raw = hashlib.blake2b(text.encode("utf-8"), digest_size=utils.SEED_DIGEST_BYTES).digest()
    return int.from_bytes(raw, "big")


def _explicit_seed(explicit_seed: SeedValue) -> Optional[Union[int, str]]:
    """Returns None for absent/blank seeds, else an int or stripped string."""
    if explicit_seed is None or isinstance(explicit_seed, bool):
        return None
    if isinstance(explicit_seed, int):
        return explicit_seed
    text = str(explicit_seed).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        return text


def default_context_token(now: Optional[Union[date, datetime]] = None) -> str:
    """The calendar day, so previews within one day repeat without a seed."""
    now = now or datetime.now()
    return now.strftime("%Y-%m-%d")


def derive_seed(explicit_seed: SeedValue = None, context_token: Optional[str] = None) -> int:
    """
    Resolves the seed used for a generation request.

    An explicit seed always wins and ignores the context token:
    integers (or integer text) are taken as-is modulo 2**64, any other
    text is digested. Without one, the context token is digested, so
    the same token gives the same seed and different tokens differ.
    """
    value = _explicit_seed(explicit_seed)
    if isinstance(value, int):
        return value % utils.SEED_MODULUS
    if value is not None:
        return _digest(f"seed:{value}")

    if context_token is None:
        context_token = default_context_token()
    return _digest(f"context:{context_token}")


def describe_seed(explicit_seed: SeedValue) -> str:
    value = _explicit_seed(explicit_seed)
    if isinstance(value, int):
        return f"{value} (integer)"
    if value is not None:
        return f"{value} (string)"
    return "(derived)"


def attempt_rng(seed: int, attempt: int) -> random.Random:
    """A deterministic stream unique to (seed, attempt)."""
    return random.Random(_digest(f"attempt:{seed}:{attempt}"))

def leader_rng(seed: int, attempt: int) -> random.Random:
    """Stream for picking group leaders once `attempt` has been accepted."""
    return random.Random(_digest(f"leaders:{seed}:{attempt}"))
