# elbsim/stats.py
"""Maps raw ability scores into probability space.

Stats drift outside 0-100 as modifiers stack up, so every helper clamps first
and never raises on out-of-range input.
"""

from .utils import clamp


def normalize(stat):
    """Clamps a stat to [0, 100] and scales it to [0, 1]."""
    return clamp(stat, 0.0, 100.0) / 100.0


def stamina_multiplier(stamina_fraction):
    """Effectiveness multiplier for a tired pitcher, never below 50%."""
    return 0.5 + 0.5 * clamp(stamina_fraction, 0.0, 1.0)


def roll(rng, probability):
    """Bernoulli draw against the injected RNG."""
    return rng.random() < probability
