import random

import pytest

from elbsim.stats import normalize, roll, stamina_multiplier
from elbsim.utils import clamp, distance, generate_name, generate_team_name, ordinal_suffix


@pytest.mark.parametrize("stat, expected", [(-20, 0.0), (0, 0.0), (50, 0.5), (100, 1.0), (180, 1.0)])
def test_normalize_clamps_out_of_range_stats(stat, expected):
    assert normalize(stat) == pytest.approx(expected)


def test_stamina_multiplier_never_drops_below_half():
    assert stamina_multiplier(1.0) == pytest.approx(1.0)
    assert stamina_multiplier(0.0) == pytest.approx(0.5)
    assert stamina_multiplier(-3.0) == pytest.approx(0.5)
    assert stamina_multiplier(2.0) == pytest.approx(1.0)


def test_roll_is_a_strict_threshold(scripted_rng):
    assert roll(scripted_rng([0.49]), 0.5)
    assert not roll(scripted_rng([0.5]), 0.5)
    assert not roll(scripted_rng([0.0]), 0.0)


@pytest.mark.parametrize("number, suffix", [
    (1, "st"), (2, "nd"), (3, "rd"), (4, "th"), (9, "th"),
    (11, "th"), (12, "th"), (13, "th"), (21, "st"), (22, "nd"), (113, "th"),
])
def test_ordinal_suffix(number, suffix):
    assert ordinal_suffix(number) == suffix


def test_clamp_and_distance():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert distance((0, 0), (3, 4)) == pytest.approx(5.0)


def test_generated_names_are_reproducible():
    assert generate_name(random.Random(3)) == generate_name(random.Random(3))
    assert len(generate_team_name(random.Random(3)).split()) == 2
