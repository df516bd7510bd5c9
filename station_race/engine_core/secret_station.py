"""
Secret station generators.

A generator is any callable (Configuration) -> int returning a station in
[first_station, last_station]. The reducer calls it exactly once per round
start and never otherwise.
"""

from __future__ import annotations
import random
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .state import Configuration


def make_secret_station(config: Configuration) -> int:
    """Default generator: uniform over the inclusive station range."""
    return random.randint(config.first_station, config.last_station)


def seeded_secret_station(seed: int | None) -> Callable[[Configuration], int]:
    """Return a reproducible generator backed by its own RNG."""
    rng = random.Random(seed)

    def generate(config: Configuration) -> int:
        return rng.randint(config.first_station, config.last_station)

    return generate


def fixed_secret_station(station: int) -> Callable[[Configuration], int]:
    """Return a generator that always picks the same station."""

    def generate(config: Configuration) -> int:
        return station

    return generate
