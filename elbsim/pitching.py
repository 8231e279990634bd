# elbsim/pitching.py

import logging
from dataclasses import dataclass
from .stats import normalize, roll

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pitch:
    velocity: float
    control: float
    movement: float
    quality: float
    is_strike: bool
    location: tuple # (x, y), each in [-1, 1]

    def to_dict(self):
        return {
            "velocity": self.velocity,
            "control": self.control,
            "movement": self.movement,
            "quality": self.quality,
            "is_strike": self.is_strike,
            "location": {"x": self.location[0], "y": self.location[1]},
        }


def generate_pitch(pitcher, rng, stamina_cost=0.5):
    """Throws one pitch with the pitcher's fatigue-adjusted stats, then tires them.

    The strike call comes from control alone. The location is drawn on its own
    and is descriptive only, so a "strike" may sit outside the nominal zone.
    """
    velocity = pitcher.get_effective_stat('pitching', 'velocity')
    control = pitcher.get_effective_stat('pitching', 'control')
    movement = pitcher.get_effective_stat('pitching', 'movement')

    is_strike = roll(rng, normalize(control))
    location = (rng.uniform(-1.0, 1.0), rng.uniform(-1.0, 1.0))

    pitcher.degrade_stamina(stamina_cost)
    logger.debug(f"{pitcher.name} pitch: vel={velocity:.1f} ctl={control:.1f} mov={movement:.1f} strike={is_strike}")

    return Pitch(
        velocity=velocity,
        control=control,
        movement=movement,
        quality=(velocity + movement) / 2,
        is_strike=is_strike,
        location=location,
    )
