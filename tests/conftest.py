import random

import pytest

from elbsim.constants import (
    BASERUNNING_STATS, BATTING_STATS, FIELDING_STATS, LINEUP_POSITIONS, PITCHER,
)
from elbsim.player import Player
from elbsim.team import Team


class ScriptedRandom(random.Random):
    """Returns queued values from random(), then a fixed default.

    uniform() and choices() are built on random(), so they follow the script too.
    """

    def __init__(self, values=(), default=0.99):
        self.values = list(values)
        self.default = default
        super().__init__(0)

    def random(self):
        if self.values:
            return self.values.pop(0)
        return self.default


def build_stats(batting=None, baserunning=None, fielding=None, pitching=None):
    stats = {
        "batting": {name: 50 for name in BATTING_STATS},
        "baserunning": {name: 50 for name in BASERUNNING_STATS},
        "fielding": {name: 50 for name in FIELDING_STATS},
    }
    stats["batting"].update(batting or {})
    stats["baserunning"].update(baserunning or {})
    stats["fielding"].update(fielding or {})
    if pitching is not None:
        stats["pitching"] = {"velocity": 50, "control": 50, "movement": 50, "max_stamina": 100}
        stats["pitching"].update(pitching)
    return stats


def build_team(prefix, name, pitching=None, seed=7):
    lineup = [
        Player(f"{prefix}{i + 1:02d}", f"{name} Batter {i + 1}", position, build_stats())
        for i, position in enumerate(LINEUP_POSITIONS)
    ]
    pitcher = Player(f"{prefix}P", f"{name} Pitcher", PITCHER, build_stats(pitching=pitching or {}),
                     is_pitcher=True)
    return Team(name, lineup, pitcher, rng=random.Random(seed))


@pytest.fixture
def scripted_rng():
    return ScriptedRandom


@pytest.fixture
def make_stats():
    return build_stats


@pytest.fixture
def make_team():
    return build_team


@pytest.fixture
def home_team():
    return build_team("H", "Home Nine")


@pytest.fixture
def away_team():
    return build_team("A", "Away Nine")
