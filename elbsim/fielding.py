# elbsim/fielding.py
"""Fielder assignment, the reach race, clean fielding and the throw race to first.

Times are in milliseconds, fielder speeds in field units per second.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from .constants import *
from .stats import normalize, roll
from .utils import distance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReachRace:
    distance_to_ball: float
    reaction_delay: float
    fielder_speed: float
    time_available: float
    coverable_distance: float
    reaches: bool

    @property
    def time_to_reach_ball(self):
        if self.fielder_speed <= 0:
            return float('inf')
        return self.reaction_delay + self.distance_to_ball / self.fielder_speed * 1000


@dataclass(frozen=True)
class ThrowRace:
    runner_time: float
    release_delay: float
    throw_distance: float
    throw_flight_time: float
    ball_time: float
    accurate: bool
    runner_out: bool


@dataclass
class FieldingResult:
    outcome: FieldingOutcome
    fielder: Optional[object] = None
    hit_reason: Optional[HitReason] = None
    fielder_missed: bool = False
    throw_target: Optional[str] = None
    reach: Optional[ReachRace] = None
    throw: Optional[ThrowRace] = None
    ball_flight_time: float = 0.0
    replaced_by: Optional[object] = None

    def fielding_physics(self):
        if self.reach is None:
            return None
        return {
            "time_to_reach_ball_ms": self.reach.time_to_reach_ball,
            "ball_flight_time_ms": self.ball_flight_time,
            "distance_to_ball": self.reach.distance_to_ball,
            "coverable_distance": self.reach.coverable_distance,
        }

    def baserunning_physics(self):
        if self.throw is None:
            return None
        return {
            "runner_time_ms": self.throw.runner_time,
            "ball_time_ms": self.throw.ball_time,
            "throw_accurate": self.throw.accurate,
        }


def responsible_position(batted_ball):
    """Deterministic fielder assignment from ball type and direction."""
    ball_type = batted_ball.type
    direction = batted_ball.direction
    if ball_type == BallType.GROUNDBALL:
        if direction < -20:
            return "3B"
        if direction < -5:
            return "SS"
        if direction < 5:
            return "2B"
        return "1B"
    if ball_type == BallType.POPUP:
        return CATCHER
    if ball_type in (BallType.LINEDRIVE, BallType.FLYBALL):
        if direction < -15:
            return "LF"
        if direction < 15:
            return "CF"
        return "RF"
    raise ValueError(f"Unhandled ball type: {ball_type}")


def is_automatic_home_run(batted_ball):
    return batted_ball.type == BallType.FLYBALL and batted_ball.distance > HOME_RUN_DISTANCE


def reaction_delay(reaction_stat):
    return 500 - 400 * normalize(reaction_stat)


def fielder_speed(speed_stat):
    return 15 + 30 * normalize(speed_stat)


def reach_race(distance_to_ball, speed, delay, flight_time_ms, jitter=1.0):
    """Can the fielder cover the gap before the ball gets there?"""
    time_available = max(0.0, flight_time_ms - delay)
    coverable = speed * (time_available / 1000.0) * jitter
    return ReachRace(
        distance_to_ball=distance_to_ball,
        reaction_delay=delay,
        fielder_speed=speed,
        time_available=time_available,
        coverable_distance=coverable,
        reaches=coverable >= distance_to_ball,
    )


def fielder_reaches_ball(fielder, position, batted_ball, rng):
    distance_to_ball = distance(FIELDER_COORDS[position], batted_ball.landing_point)
    jitter = rng.uniform(0.9, 1.1)
    return reach_race(
        distance_to_ball,
        fielder_speed(fielder.fielding['speed']),
        reaction_delay(fielder.fielding['reaction_time']),
        batted_ball.flight_time,
        jitter=jitter,
    )


def clean_field_probability(fielding_stat):
    return 0.90 + 0.09 * normalize(fielding_stat)


def runner_time_to_first(runner_speed):
    return 4500 - 700 * normalize(runner_speed)


def throw_accuracy_probability(accuracy):
    return 0.8 + 0.19 * normalize(accuracy)


def throw_race(runner_speed, fielding_stat, throw_power, throw_distance, possession_time, accurate):
    """Races the ball to first against the batter-runner.

    ``possession_time`` is when the fielder has the ball in hand. The runner is
    out only on an accurate throw that arrives first.
    """
    runner_time = runner_time_to_first(runner_speed)
    release = 400 - 200 * normalize(fielding_stat)
    throw_speed = 40 + 30 * normalize(throw_power)
    throw_flight = throw_distance / throw_speed * 1000
    ball_time = possession_time + release + throw_flight
    return ThrowRace(
        runner_time=runner_time,
        release_delay=release,
        throw_distance=throw_distance,
        throw_flight_time=throw_flight,
        ball_time=ball_time,
        accurate=accurate,
        runner_out=accurate and ball_time < runner_time,
    )


def determine_hit_bases(batted_ball, fielder_missed):
    bases = 1
    if batted_ball.distance > 300 or batted_ball.type == BallType.LINEDRIVE:
        bases = 2
    if batted_ball.distance > 350 and fielder_missed:
        bases = 3
    return bases


def resolve_ball_in_play(batted_ball, fielding_team, runner, rng, incinerate=None):
    """Plays a batted ball out against the fielding team.

    ``incinerate(player)`` is asked first whether the responsible fielder is
    removed from play; it returns the replacement player or None.
    """
    if is_automatic_home_run(batted_ball):
        return FieldingResult(outcome=FieldingOutcome.HOME_RUN, ball_flight_time=batted_ball.flight_time)

    position = responsible_position(batted_ball)
    fielder = fielding_team.get_player_at_position(position)

    if incinerate is not None:
        replacement = incinerate(fielder)
        if replacement is not None:
            return FieldingResult(
                outcome=FieldingOutcome.HIT,
                fielder=fielder,
                hit_reason=HitReason.FIELDER_INCINERATED,
                fielder_missed=True,
                ball_flight_time=batted_ball.flight_time,
                replaced_by=replacement,
            )

    reach = fielder_reaches_ball(fielder, position, batted_ball, rng)
    if not reach.reaches:
        return FieldingResult(
            outcome=FieldingOutcome.HIT,
            fielder=fielder,
            hit_reason=HitReason.UNREACHED,
            fielder_missed=True,
            reach=reach,
            ball_flight_time=batted_ball.flight_time,
        )

    if not roll(rng, clean_field_probability(fielder.fielding['fielding'])):
        return FieldingResult(
            outcome=FieldingOutcome.HIT,
            fielder=fielder,
            hit_reason=HitReason.BOBBLED,
            reach=reach,
            ball_flight_time=batted_ball.flight_time,
        )

    if batted_ball.type in CATCH_TYPES:
        return FieldingResult(
            outcome=FieldingOutcome.CATCH,
            fielder=fielder,
            reach=reach,
            ball_flight_time=batted_ball.flight_time,
        )

    if batted_ball.type not in THROWN_TYPES:
        raise ValueError(f"Unhandled ball type: {batted_ball.type}")

    accurate = roll(rng, throw_accuracy_probability(fielder.fielding['throwing_accuracy']))
    throw = throw_race(
        runner.baserunning['speed'],
        fielder.fielding['fielding'],
        fielder.fielding['throwing_power'],
        distance(batted_ball.landing_point, FIRST_BASE_COORDS),
        batted_ball.flight_time,
        accurate,
    )
    logger.debug(f"Throw race: ball {throw.ball_time:.0f}ms vs runner {throw.runner_time:.0f}ms, accurate={accurate}")

    if throw.runner_out:
        return FieldingResult(
            outcome=FieldingOutcome.GROUNDOUT,
            fielder=fielder,
            throw_target=BASE_NAMES[FIRST_BASE],
            reach=reach,
            throw=throw,
            ball_flight_time=batted_ball.flight_time,
        )
    return FieldingResult(
        outcome=FieldingOutcome.HIT,
        fielder=fielder,
        hit_reason=HitReason.BEAT_THROW if accurate else HitReason.THROWING_ERROR,
        throw_target=BASE_NAMES[FIRST_BASE],
        reach=reach,
        throw=throw,
        ball_flight_time=batted_ball.flight_time,
    )
