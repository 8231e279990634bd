# elbsim/bases.py

import logging
from .constants import *

logger = logging.getLogger(__name__)


class BaseState:
    """Runner occupancy by player id. Index 0=1B, 1=2B, 2=3B."""

    def __init__(self, first=None, second=None, third=None):
        self.slots = [first, second, third]
        self._check()

    @property
    def first(self):
        return self.slots[FIRST_BASE]

    @property
    def second(self):
        return self.slots[SECOND_BASE]

    @property
    def third(self):
        return self.slots[THIRD_BASE]

    def occupied(self):
        """Which bases are occupied, as (first, second, third) booleans."""
        return tuple(runner is not None for runner in self.slots)

    def runners(self):
        return [runner for runner in self.slots if runner is not None]

    def clear(self):
        self.slots = [None] * 3

    def remove(self, player_id):
        """Takes a player off the bases (e.g. incinerated). Returns True if they were on."""
        removed = False
        for index, runner in enumerate(self.slots):
            if runner == player_id:
                self.slots[index] = None
                removed = True
        return removed

    def advance_on_hit(self, bases, batter_id):
        """Moves runners for a single, double or triple and puts the batter on.

        Third always scores. Second scores on a double or better, otherwise
        goes to third. First scores on a triple, goes to third on a double and
        to second on a single. Returns the runners who scored, lead runner first.
        """
        if bases not in HIT_NAMES:
            raise ValueError(f"Hit must be worth 1-3 bases, got {bases}")
        first, second, third = self.slots
        new_slots = [None] * 3
        scored = []

        if third is not None:
            scored.append(third)
        if second is not None:
            if bases >= 2:
                scored.append(second)
            else:
                new_slots[THIRD_BASE] = second
        if first is not None:
            if bases >= 3:
                scored.append(first)
            elif bases == 2:
                new_slots[THIRD_BASE] = first
            else:
                new_slots[SECOND_BASE] = first

        new_slots[bases - 1] = batter_id
        self.slots = new_slots
        self._check()
        return scored

    def force_walk(self, batter_id):
        """Puts the batter on first, advancing only runners forced by the runner behind."""
        first, second, third = self.slots
        scored = []
        if first is not None:
            if second is not None:
                if third is not None:
                    scored.append(third)
                self.slots[THIRD_BASE] = second
            self.slots[SECOND_BASE] = first
        self.slots[FIRST_BASE] = batter_id
        self._check()
        return scored

    def clear_on_home_run(self):
        """Every runner scores and the bases empty. Returns the runners who scored."""
        scored = [runner for runner in reversed(self.slots) if runner is not None]
        self.clear()
        return scored

    def _check(self):
        runners = self.runners()
        if len(runners) != len(set(runners)):
            raise AssertionError(f"Runner on more than one base: {self.slots}")

    def describe(self, name_for=None):
        """Human-readable base state, e.g. '1B: P123456, 3B: P654321'."""
        base_strs = []
        for index, runner in enumerate(self.slots):
            if runner is not None:
                label = name_for(runner) if name_for else runner
                base_strs.append(f"{index + 1}B: {label}")
        return ", ".join(base_strs) if base_strs else "Bases empty"

    def __repr__(self):
        return f"BaseState({self.slots})"
