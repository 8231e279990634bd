import logging
import random

import pytest

from elbsim.constants import FIELDING_POSITIONS, LINEUP_POSITIONS, PITCHER, STAT_CEILING
from elbsim.player import Player, generate_player
from elbsim.team import Team, TeamConfigurationError, generate_team


def test_missing_stats_default_to_fifty_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="elbsim.player"):
        player = Player("X1", "Sparse Stats", "CF", {"batting": {"contact": 80}})
    assert player.batting["contact"] == 80
    assert player.batting["power"] == 50
    assert player.fielding["reaction_time"] == 50
    assert "missing batting stats" in caplog.text


def test_pitcher_starts_at_full_stamina(make_stats):
    pitcher = Player("P1", "Ace", PITCHER, make_stats(pitching={"max_stamina": 80}), is_pitcher=True)
    assert pitcher.pitching["stamina"] == 80
    assert pitcher.stamina_fraction == pytest.approx(1.0)


def test_fatigue_scales_pitching_stats_down_to_half(make_stats):
    pitcher = Player("P1", "Ace", PITCHER, make_stats(pitching={"velocity": 80, "stamina": 0}), is_pitcher=True)
    assert pitcher.get_effective_stat("pitching", "velocity") == pytest.approx(40.0)
    # Batting stats are never fatigued
    assert pitcher.get_effective_stat("batting", "contact") == pytest.approx(50.0)

    pitcher.rest()
    assert pitcher.get_effective_stat("pitching", "velocity") == pytest.approx(80.0)


def test_degrade_stamina_floors_at_zero(make_stats):
    pitcher = Player("P1", "Ace", PITCHER, make_stats(pitching={"max_stamina": 10}), is_pitcher=True)
    pitcher.degrade_stamina(25)
    assert pitcher.pitching["stamina"] == 0
    assert pitcher.stamina_fraction == 0.0


def test_stat_modifier_is_clamped(make_stats):
    player = Player("B1", "Slugger", "1B", make_stats(batting={"power": 150}))
    assert player.apply_stat_modifier("batting", "power", 100)
    assert player.batting["power"] == STAT_CEILING
    assert not player.apply_stat_modifier("batting", "unknown", 10)
    with pytest.raises(ValueError):
        player.apply_stat_modifier("charisma", "power", 10)


def test_generate_player_respects_role():
    rng = random.Random(5)
    pitcher = generate_player(rng, PITCHER, is_pitcher=True)
    batter = generate_player(rng, "SS")
    assert pitcher.pitching is not None
    assert batter.pitching is None
    assert 70 <= pitcher.pitching["max_stamina"] <= 100
    assert all(30 <= value <= 90 for value in batter.batting.values())


def test_validate_rejects_empty_lineup(home_team):
    home_team.lineup = []
    with pytest.raises(TeamConfigurationError):
        home_team.validate()


def test_validate_rejects_missing_pitcher(home_team):
    home_team.pitcher = None
    with pytest.raises(TeamConfigurationError):
        home_team.validate()


def test_validate_rejects_unfillable_position(home_team):
    home_team.lineup = [player for player in home_team.lineup if player.position != "SS"]
    with pytest.raises(TeamConfigurationError, match="SS"):
        home_team.validate()


def test_validate_rejects_duplicate_ids(home_team):
    home_team.lineup[1].id = home_team.lineup[0].id
    with pytest.raises(TeamConfigurationError, match="duplicate"):
        home_team.validate()


def test_team_configuration_error_is_a_value_error():
    assert issubclass(TeamConfigurationError, ValueError)


def test_fielding_lookup(home_team):
    assert home_team.get_player_at_position(PITCHER) is home_team.pitcher
    for position in FIELDING_POSITIONS:
        assert home_team.get_player_at_position(position).position == position
    assert home_team.get_player("H03") is home_team.lineup[2]
    assert home_team.get_player("nobody") is None


def test_incinerate_and_replace_keeps_slot_and_position(home_team):
    victim = home_team.lineup[4]
    replacement = home_team.incinerate_and_replace(victim)

    assert home_team.lineup[4] is replacement
    assert replacement.position == victim.position
    assert replacement.id != victim.id
    assert home_team.get_player(victim.id) is None
    home_team.validate()


def test_incinerated_pitcher_is_replaced_by_a_pitcher(home_team):
    old = home_team.pitcher
    replacement = home_team.incinerate_and_replace(old)
    assert home_team.pitcher is replacement
    assert replacement.is_pitcher
    assert replacement.pitching["stamina"] == replacement.pitching["max_stamina"]


def test_reorder_lineup(home_team):
    order = [player.id for player in reversed(home_team.lineup)]
    assert home_team.reorder_lineup(order)
    assert [player.id for player in home_team.lineup] == order
    assert not home_team.reorder_lineup(order[:-1])


def test_from_config_round_trips_to_dict(home_team):
    rebuilt = Team.from_config(home_team.to_dict())
    assert rebuilt.name == home_team.name
    assert [p.id for p in rebuilt.lineup] == [p.id for p in home_team.lineup]
    assert rebuilt.pitcher.id == home_team.pitcher.id
    rebuilt.validate()


def test_from_config_missing_key_raises_value_error():
    with pytest.raises(ValueError, match="missing key"):
        Team.from_config({"name": "No Pitcher", "lineup": []})


def test_generate_team_is_legal():
    team = generate_team(random.Random(99), name="Generated")
    team.validate()
    assert team.name == "Generated"
    assert [player.position for player in team.lineup] == list(LINEUP_POSITIONS)
    assert team.pitcher.is_pitcher
    assert 0 < team.team_rating() <= 100
