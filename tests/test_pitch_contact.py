import pytest

from elbsim.constants import PITCHER
from elbsim.contact import (
    LUCKY_CONTACT_CHANCE, batter_swings, contact_probability, contact_radius,
    placement_spread, resolve_contact, swing_probability, timing_window,
)
from elbsim.pitching import Pitch, generate_pitch
from elbsim.player import Player


def make_pitch(is_strike=True, velocity=50.0, quality=50.0, location=(0.0, 0.0)):
    return Pitch(velocity=velocity, control=50.0, movement=50.0, quality=quality,
                 is_strike=is_strike, location=location)


def test_pinpoint_control_always_throws_strikes(make_stats, scripted_rng):
    pitcher = Player("P1", "Ace", PITCHER, make_stats(pitching={"control": 100}), is_pitcher=True)
    pitch = generate_pitch(pitcher, scripted_rng(default=0.99), stamina_cost=2.0)
    assert pitch.is_strike
    assert pitcher.pitching["stamina"] == pytest.approx(98.0)


def test_pitch_uses_fatigued_stats(make_stats, scripted_rng):
    pitcher = Player("P1", "Tired", PITCHER,
                     make_stats(pitching={"velocity": 90, "movement": 70, "control": 100, "stamina": 0}),
                     is_pitcher=True)
    pitch = generate_pitch(pitcher, scripted_rng([0.5, 0.5, 0.5]))
    assert pitch.velocity == pytest.approx(45.0)
    assert pitch.movement == pytest.approx(35.0)
    assert pitch.quality == pytest.approx(40.0)
    # Half of 100 control means a 50% strike chance, and 0.5 is not below it
    assert not pitch.is_strike
    assert pitch.location == (pytest.approx(0.0), pytest.approx(0.0))


def test_location_stays_in_unit_square(make_stats, scripted_rng):
    pitcher = Player("P1", "Ace", PITCHER, make_stats(pitching={}), is_pitcher=True)
    pitch = generate_pitch(pitcher, scripted_rng([0.2, 0.0, 0.999]))
    x, y = pitch.location
    assert -1.0 <= x <= 1.0 and -1.0 <= y <= 1.0
    assert pitch.to_dict()["location"]["x"] == pytest.approx(-1.0)


def test_swing_probability_depends_on_discipline():
    assert swing_probability(100, True) == pytest.approx(0.75)
    assert swing_probability(0, True) == pytest.approx(0.55)
    assert swing_probability(100, False) == pytest.approx(0.1)
    assert swing_probability(0, False) == pytest.approx(0.4)


def test_batter_takes_on_high_roll(make_stats, scripted_rng):
    batter = Player("B1", "Patient", "CF", make_stats())
    assert not batter_swings(batter, make_pitch(is_strike=True), scripted_rng([0.99]))
    assert batter_swings(batter, make_pitch(is_strike=True), scripted_rng([0.1]))


def test_contact_model_curves():
    assert timing_window(0) == pytest.approx(150)
    assert timing_window(100) == pytest.approx(100)
    assert contact_radius(100) == pytest.approx(0.8)
    assert placement_spread(100) == pytest.approx(0.3)
    assert contact_probability(True, True, 100) == pytest.approx(0.8)
    assert contact_probability(True, False, 0) == LUCKY_CONTACT_CHANCE
    assert contact_probability(False, True, 0) == LUCKY_CONTACT_CHANCE


def test_good_timing_and_location_make_contact(make_stats, scripted_rng):
    batter = Player("B1", "Contact Hitter", "2B", make_stats(batting={"contact": 100}))
    attempt = resolve_contact(batter, make_pitch(), scripted_rng([0.5, 0.5, 0.5, 0.5]))
    assert attempt.timing_ok
    assert attempt.location_ok
    assert attempt.bat_offset == pytest.approx(0.0)
    assert attempt.probability == pytest.approx(0.9)
    assert attempt.contact


def test_late_swing_falls_back_to_lucky_contact(make_stats, scripted_rng):
    batter = Player("B1", "Weak Bat", "C", make_stats(batting={"contact": 0}))
    attempt = resolve_contact(batter, make_pitch(velocity=100), scripted_rng([0.0, 0.5, 0.5, 0.5]))
    assert not attempt.timing_ok
    assert attempt.probability == LUCKY_CONTACT_CHANCE
    assert not attempt.contact
