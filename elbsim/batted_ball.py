# elbsim/batted_ball.py

import logging
import math
from dataclasses import dataclass
from .constants import *
from .stats import normalize
from .utils import clamp

logger = logging.getLogger(__name__)

# Launch angle band drawn for each category before the pitch-height adjustment
ANGLE_RANGES = {
    BallType.GROUNDBALL: (-10.0, 10.0),
    BallType.LINEDRIVE: (10.0, 25.0),
    BallType.FLYBALL: (25.0, 45.0),
    BallType.POPUP: (50.0, 80.0),
}

DESCRIPTIONS = {
    BallType.GROUNDBALL: "A ground ball",
    BallType.LINEDRIVE: "A line drive",
    BallType.FLYBALL: "A fly ball",
    BallType.POPUP: "A pop up",
}

OPTIMAL_LAUNCH_ANGLE = 28.0


@dataclass(frozen=True)
class BattedBall:
    type: BallType
    launch_angle: float
    exit_velocity: float
    direction: float # Degrees, negative = left of center
    distance: float # Feet
    flight_time: float # Milliseconds
    description: str

    @property
    def landing_point(self):
        """Where the ball comes down (or is fielded), in field units."""
        units = self.distance / FEET_PER_UNIT
        radians = math.radians(self.direction)
        return (units * math.sin(radians), units * math.cos(radians))

    def to_dict(self):
        return {
            "type": self.type.value,
            "launch_angle": self.launch_angle,
            "exit_velocity": self.exit_velocity,
            "direction": self.direction,
            "distance": self.distance,
            "flight_time": self.flight_time,
            "description": self.description,
        }


def contact_quality(location):
    """1.0 for a centered pitch, falling to 0.5 toward the corners."""
    return max(0.5, 1 - 0.35 * math.hypot(location[0], location[1]))


def exit_velocity(power, contact, pitch_velocity, quality):
    return (70 + 30 * normalize(power) + 10 * normalize(contact) + 10 * normalize(pitch_velocity)) * quality


def category_weights(aggression):
    """Fly balls take share from pop ups as aggression rises."""
    aggression_factor = normalize(aggression)
    return {
        BallType.GROUNDBALL: 0.25,
        BallType.LINEDRIVE: 0.20,
        BallType.FLYBALL: 0.45 * aggression_factor,
        BallType.POPUP: 0.55 - 0.45 * aggression_factor,
    }


def classify_angle(angle):
    """The category a final launch angle belongs to."""
    if angle < 10:
        return BallType.GROUNDBALL
    if angle < 25:
        return BallType.LINEDRIVE
    if angle <= 50:
        return BallType.FLYBALL
    return BallType.POPUP


def batted_distance(exit_velo, launch_angle):
    angle_factor = max(0.3, 1 - abs(launch_angle - OPTIMAL_LAUNCH_ANGLE) / 50)
    return max(50.0, (exit_velo / 110) * 450 * angle_factor)


def flight_time(ball_type, distance):
    low, high, reference = FLIGHT_TIME_PROFILE[ball_type]
    return low + (high - low) * min(1.0, distance / reference)


def resolve_batted_ball(batter, pitch, rng):
    """Turns contact into a trajectory."""
    power = batter.batting['power']
    contact = batter.batting['contact']
    pitch_x, pitch_y = pitch.location

    quality = contact_quality(pitch.location)
    exit_velo = exit_velocity(power, contact, pitch.velocity, quality)

    weights = category_weights(batter.batting['aggression'])
    drawn_type = rng.choices(list(weights.keys()), weights=list(weights.values()), k=1)[0]
    low, high = ANGLE_RANGES[drawn_type]
    launch_angle = rng.uniform(low, high) + pitch_y * 20

    # Pitch height can push the ball out of its drawn band; the final angle wins
    ball_type = classify_angle(launch_angle)
    if ball_type != drawn_type:
        logger.debug(f"Launch angle {launch_angle:.1f} re-classified {drawn_type.value} as {ball_type.value}")

    direction = clamp(rng.uniform(-45, 45) - pitch_x * 30, -45.0, 45.0)
    distance = batted_distance(exit_velo, launch_angle)

    return BattedBall(
        type=ball_type,
        launch_angle=launch_angle,
        exit_velocity=exit_velo,
        direction=direction,
        distance=distance,
        flight_time=flight_time(ball_type, distance),
        description=DESCRIPTIONS[ball_type],
    )
