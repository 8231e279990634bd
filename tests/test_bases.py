import pytest

from elbsim.bases import BaseState


def test_single_moves_everyone_up_one():
    bases = BaseState("r1", "r2", "r3")
    scored = bases.advance_on_hit(1, "bat")
    assert scored == ["r3"]
    assert bases.slots == ["bat", "r1", "r2"]


def test_double_scores_from_second_and_first_goes_to_third():
    bases = BaseState("r1", "r2", None)
    scored = bases.advance_on_hit(2, "bat")
    assert scored == ["r2"]
    assert bases.slots == [None, "bat", "r1"]


def test_triple_clears_the_bases():
    bases = BaseState("r1", "r2", "r3")
    scored = bases.advance_on_hit(3, "bat")
    assert scored == ["r3", "r2", "r1"]
    assert bases.slots == [None, None, "bat"]


def test_hit_must_be_one_to_three_bases():
    with pytest.raises(ValueError):
        BaseState().advance_on_hit(4, "bat")


def test_walk_only_advances_forced_runners():
    bases = BaseState(None, "r2", "r3")
    assert bases.force_walk("bat") == []
    assert bases.slots == ["bat", "r2", "r3"]

    bases = BaseState("r1", None, "r3")
    assert bases.force_walk("bat") == []
    assert bases.slots == ["bat", "r1", "r3"]


def test_walk_with_bases_loaded_forces_in_a_run():
    bases = BaseState("r1", "r2", "r3")
    assert bases.force_walk("bat") == ["r3"]
    assert bases.slots == ["bat", "r1", "r2"]


def test_home_run_empties_the_bases():
    bases = BaseState("r1", None, "r3")
    assert bases.clear_on_home_run() == ["r3", "r1"]
    assert bases.occupied() == (False, False, False)


def test_a_runner_cannot_hold_two_bases():
    with pytest.raises(AssertionError):
        BaseState("r1", "r1", None)


def test_remove_takes_a_runner_off():
    bases = BaseState("r1", None, "r3")
    assert bases.remove("r3")
    assert not bases.remove("ghost")
    assert bases.runners() == ["r1"]
    assert bases.describe() == "1B: r1"
    assert BaseState().describe() == "Bases empty"
