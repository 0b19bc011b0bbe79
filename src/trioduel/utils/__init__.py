"""Utility functions for the trioduel battle engine."""

from trioduel.utils.rng import (
    RandomSource,
    generate_seed,
    seeded_source,
    sequence_source,
    system_source,
    uniform,
)

__all__ = [
    "RandomSource",
    "generate_seed",
    "seeded_source",
    "sequence_source",
    "system_source",
    "uniform",
]
