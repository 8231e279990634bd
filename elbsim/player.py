# elbsim/player.py

import logging
from .constants import *
from .stats import stamina_multiplier
from .utils import clamp, generate_name

logger = logging.getLogger(__name__)

# Ranges used when a player is generated from scratch (e.g. after an incineration)
POSITION_PLAYER_RANGES = {
    "batting": {stat: (30, 90) for stat in BATTING_STATS},
    "baserunning": {stat: (30, 90) for stat in BASERUNNING_STATS},
    "fielding": {stat: (30, 90) for stat in FIELDING_STATS},
}

PITCHER_RANGES = {
    "pitching": {"velocity": (30, 90), "control": (30, 90), "movement": (30, 90), "max_stamina": (70, 100)},
    "batting": {stat: (10, 40) for stat in BATTING_STATS},
    "baserunning": {"speed": (10, 50), "stealing_skill": (10, 40), "stealing_tendency": (10, 30), "intelligence": (10, 50)},
    "fielding": {"fielding": (30, 70), "throwing_accuracy": (50, 90), "throwing_power": (50, 90),
                 "speed": (20, 60), "reaction_time": (30, 70)},
}


class Player:
    """A player identified by a stable id, holding categorized stat values."""

    def __init__(self, player_id, name, position, stats, is_pitcher=False):
        self.id = str(player_id)
        self.name = name
        self.position = position
        self.is_pitcher = is_pitcher
        self.batting = self._load_category(stats, "batting")
        self.baserunning = self._load_category(stats, "baserunning")
        self.fielding = self._load_category(stats, "fielding")
        self.pitching = self._load_pitching(stats) if is_pitcher else None

    def _load_category(self, stats, category):
        raw = stats.get(category) or {}
        values = {}
        missing = []
        for stat_name in STAT_CATEGORIES[category]:
            if stat_name in raw:
                values[stat_name] = float(raw[stat_name])
            else:
                missing.append(stat_name)
                values[stat_name] = DEFAULT_STAT
        if missing:
            logger.warning(f"Player {self.name} missing {category} stats {missing}. Defaulting to {DEFAULT_STAT}.")
        return values

    def _load_pitching(self, stats):
        raw = dict(stats.get("pitching") or {})
        max_stamina = float(raw.get("max_stamina", 100.0))
        if max_stamina <= 0:
            logger.warning(f"Pitcher {self.name} has non-positive max stamina ({max_stamina}). Setting to 100.")
            max_stamina = 100.0
        raw["max_stamina"] = max_stamina
        raw.setdefault("stamina", max_stamina)
        return self._load_category({"pitching": raw}, "pitching")

    def _category(self, category):
        if category not in STAT_CATEGORIES:
            raise ValueError(f"Unknown stat category '{category}'")
        return getattr(self, category)

    @property
    def stamina_fraction(self):
        if not self.pitching:
            return 1.0
        return clamp(self.pitching["stamina"] / self.pitching["max_stamina"], 0.0, 1.0)

    def get_stat(self, category, stat_name):
        values = self._category(category)
        if values is None:
            return 0.0
        return values[stat_name]

    def get_effective_stat(self, category, stat_name):
        """Returns a stat, scaled down by fatigue for pitching stats."""
        base_stat = self.get_stat(category, stat_name)
        if category == "pitching" and self.pitching:
            base_stat *= stamina_multiplier(self.stamina_fraction)
        return base_stat

    def degrade_stamina(self, amount):
        if self.pitching:
            self.pitching["stamina"] = max(0.0, self.pitching["stamina"] - amount)

    def rest(self):
        if self.pitching:
            self.pitching["stamina"] = self.pitching["max_stamina"]

    def apply_stat_modifier(self, category, stat_name, percent_change):
        """Percentage-based stat change, clamped to the legal stat band."""
        values = self._category(category)
        if values is None or stat_name not in values:
            return False
        current = values[stat_name]
        values[stat_name] = clamp(current + current * (percent_change / 100.0), STAT_FLOOR, STAT_CEILING)
        return True

    def overall_rating(self):
        total = 0.0
        count = 0
        for category in STAT_CATEGORIES:
            values = getattr(self, category)
            if not values:
                continue
            for stat_name, value in values.items():
                if stat_name in ("stamina", "max_stamina"):
                    continue
                total += value
                count += 1
        return round(total / count) if count else DEFAULT_STAT

    def to_dict(self):
        stats = {"batting": dict(self.batting), "baserunning": dict(self.baserunning), "fielding": dict(self.fielding)}
        if self.pitching:
            stats["pitching"] = dict(self.pitching)
        return {"id": self.id, "name": self.name, "position": self.position, "stats": stats}

    def __str__(self):
        return f"Player({self.id} - {self.name})"

    def __repr__(self):
        return f"Player({self.id})"


def generate_player(rng, position, is_pitcher=False, player_id=None):
    """Creates a random player using the stat ranges for their role."""
    ranges = PITCHER_RANGES if is_pitcher else POSITION_PLAYER_RANGES
    stats = {}
    for category, stat_ranges in ranges.items():
        stats[category] = {name: rng.randint(low, high) for name, (low, high) in stat_ranges.items()}
    if player_id is None:
        player_id = f"P{rng.randint(100000, 999999)}"
    player = Player(player_id, generate_name(rng), position, stats, is_pitcher=is_pitcher)
    logger.debug(f"Generated player {player.id} - {player.name} ({position})")
    return player
