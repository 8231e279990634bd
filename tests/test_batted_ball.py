import pytest

from elbsim.batted_ball import (
    BattedBall, batted_distance, category_weights, classify_angle, contact_quality,
    flight_time, resolve_batted_ball,
)
from elbsim.constants import BallType
from elbsim.pitching import Pitch
from elbsim.player import Player


def make_pitch(location):
    return Pitch(velocity=50.0, control=50.0, movement=50.0, quality=50.0, is_strike=True, location=location)


@pytest.mark.parametrize("angle, ball_type", [
    (-15, BallType.GROUNDBALL), (9.9, BallType.GROUNDBALL),
    (10, BallType.LINEDRIVE), (24.9, BallType.LINEDRIVE),
    (25, BallType.FLYBALL), (50, BallType.FLYBALL),
    (50.1, BallType.POPUP), (95, BallType.POPUP),
])
def test_classify_angle_bands(angle, ball_type):
    assert classify_angle(angle) == ball_type


@pytest.mark.parametrize("aggression", [0, 35, 100, 150])
def test_category_weights_always_sum_to_one(aggression):
    weights = category_weights(aggression)
    assert sum(weights.values()) == pytest.approx(1.0)
    assert all(weight >= 0 for weight in weights.values())


def test_aggression_trades_popups_for_flyballs():
    timid, wild = category_weights(0), category_weights(100)
    assert timid[BallType.FLYBALL] == 0
    assert wild[BallType.FLYBALL] > timid[BallType.FLYBALL]
    assert wild[BallType.POPUP] < timid[BallType.POPUP]


def test_contact_quality_falls_off_toward_corners():
    assert contact_quality((0.0, 0.0)) == pytest.approx(1.0)
    assert contact_quality((1.0, 0.0)) == pytest.approx(0.65)
    assert contact_quality((3.0, 0.0)) == pytest.approx(0.5)


def test_distance_has_a_floor_and_peaks_near_optimal_angle():
    assert batted_distance(10, -80) == pytest.approx(50.0)
    assert batted_distance(110, 28) == pytest.approx(450.0)
    assert batted_distance(110, 28) > batted_distance(110, 10)


def test_flight_time_interpolates_and_caps():
    assert flight_time(BallType.GROUNDBALL, 100) == pytest.approx(1000.0)
    assert flight_time(BallType.GROUNDBALL, 1000) == pytest.approx(1200.0)
    assert flight_time(BallType.FLYBALL, 0) == pytest.approx(1500.0)


def test_high_pitch_lifts_a_grounder_into_a_line_drive(make_stats, scripted_rng):
    batter = Player("B1", "Lifter", "LF", make_stats())
    # choices -> groundball, angle draw mid-band (0), direction draw centered
    ball = resolve_batted_ball(batter, make_pitch((0.0, 0.8)), scripted_rng([0.1, 0.5, 0.5]))
    assert ball.type == BallType.LINEDRIVE
    assert ball.launch_angle == pytest.approx(16.0)
    assert ball.direction == pytest.approx(0.0)
    assert ball.description == "A line drive"


def test_direction_is_clamped_to_the_field(make_stats, scripted_rng):
    batter = Player("B1", "Puller", "RF", make_stats())
    ball = resolve_batted_ball(batter, make_pitch((-1.0, 0.0)), scripted_rng([0.1, 0.5, 0.99]))
    assert ball.direction == pytest.approx(45.0)


def test_landing_point_is_in_field_units():
    ball = BattedBall(BallType.FLYBALL, 30.0, 100.0, 0.0, 320.0, 2700.0, "A fly ball")
    x, y = ball.landing_point
    assert x == pytest.approx(0.0)
    assert y == pytest.approx(80.0)
