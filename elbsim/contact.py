# elbsim/contact.py
"""Swing decisions and the timing/location contact model."""

import logging
import math
from dataclasses import dataclass
from .stats import normalize, roll

logger = logging.getLogger(__name__)

LUCKY_CONTACT_CHANCE = 0.2


@dataclass(frozen=True)
class ContactAttempt:
    timing_window: float
    timing_value: float
    timing_ok: bool
    bat_offset: float
    contact_radius: float
    location_ok: bool
    probability: float
    contact: bool


def swing_probability(discipline, is_strike):
    discipline_factor = normalize(discipline)
    if is_strike:
        return 0.55 + 0.2 * discipline_factor
    # Better discipline = less likely to chase
    return 0.4 - 0.3 * discipline_factor


def batter_swings(batter, pitch, rng):
    return roll(rng, swing_probability(batter.batting['discipline'], pitch.is_strike))


def timing_window(pitch_velocity):
    """Milliseconds the batter has to get the bat started; shrinks with velocity."""
    return 150 - 50 * normalize(pitch_velocity)


def contact_radius(power):
    return 0.5 + 0.3 * normalize(power)


def placement_spread(contact):
    """Per-axis bat placement error bound; a better contact hitter misses by less."""
    return 1.0 - 0.7 * normalize(contact)


def contact_probability(timing_ok, location_ok, pitch_quality):
    if timing_ok and location_ok:
        return 1 - 0.2 * normalize(pitch_quality)
    return LUCKY_CONTACT_CHANCE


def resolve_contact(batter, pitch, rng):
    """Runs the timing and location gates and the final contact roll."""
    contact = batter.batting['contact']

    window = timing_window(pitch.velocity)
    timing_value = 150 * normalize(contact) + rng.uniform(-50, 50)
    timing_ok = timing_value >= window / 2

    spread = placement_spread(contact)
    offset_x = rng.uniform(-spread, spread)
    offset_y = rng.uniform(-spread, spread)
    # Bat placement is the pitch location plus the error; only the gap matters
    bat_offset = math.hypot(offset_x, offset_y)
    radius = contact_radius(batter.batting['power'])
    location_ok = bat_offset <= radius

    probability = contact_probability(timing_ok, location_ok, pitch.quality)
    made_contact = roll(rng, probability)

    logger.debug(f"Contact attempt by {batter.name}: timing {timing_value:.0f}/{window:.0f} ok={timing_ok}, "
                 f"offset {bat_offset:.2f}/{radius:.2f} ok={location_ok}, p={probability:.2f} -> {made_contact}")
    return ContactAttempt(
        timing_window=window,
        timing_value=timing_value,
        timing_ok=timing_ok,
        bat_offset=bat_offset,
        contact_radius=radius,
        location_ok=location_ok,
        probability=probability,
        contact=made_contact,
    )
