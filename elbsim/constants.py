# elbsim/constants.py

from enum import Enum


class BallType(str, Enum):
    GROUNDBALL = "groundball"
    LINEDRIVE = "linedrive"
    FLYBALL = "flyball"
    POPUP = "popup"


class PlayType(str, Enum):
    PITCH = "pitch"
    SWING_MISS = "swing-miss"
    OUT = "out"
    WALK = "walk"
    HIT = "hit"
    HOME_RUN = "homerun"


class OutType(str, Enum):
    STRIKEOUT = "strikeout"
    GROUNDOUT = "groundout"
    FLYOUT = "flyout"


class FieldingOutcome(str, Enum):
    HOME_RUN = "home_run"
    CATCH = "catch"
    GROUNDOUT = "groundout"
    HIT = "hit"


class HitReason(str, Enum):
    FIELDER_INCINERATED = "fielder_incinerated"
    UNREACHED = "unreached"
    BOBBLED = "bobbled"
    THROWING_ERROR = "throwing_error"
    BEAT_THROW = "beat_throw"


# Caught when reached cleanly; everything else is played to first
CATCH_TYPES = (BallType.FLYBALL, BallType.POPUP)
THROWN_TYPES = (BallType.GROUNDBALL, BallType.LINEDRIVE)

# Bases
FIRST_BASE = 0
SECOND_BASE = 1
THIRD_BASE = 2

BASE_NAMES = ("first", "second", "third")
HIT_NAMES = {1: "single", 2: "double", 3: "triple"}

# Count limits
BALLS_FOR_WALK = 4
STRIKES_FOR_OUT = 3
OUTS_PER_HALF = 3

# Positions
PITCHER = "P"
CATCHER = "C"
FIELDING_POSITIONS = ("C", "1B", "2B", "3B", "SS", "LF", "CF", "RF")
LINEUP_POSITIONS = FIELDING_POSITIONS + ("DH",)

# Stat categories and names
BATTING_STATS = ("contact", "power", "discipline", "aggression")
BASERUNNING_STATS = ("speed", "stealing_skill", "stealing_tendency", "intelligence")
FIELDING_STATS = ("fielding", "throwing_accuracy", "throwing_power", "speed", "reaction_time")
PITCHING_STATS = ("velocity", "control", "movement", "stamina", "max_stamina")
STAT_CATEGORIES = {
    "batting": BATTING_STATS,
    "baserunning": BASERUNNING_STATS,
    "fielding": FIELDING_STATS,
    "pitching": PITCHING_STATS,
}
DEFAULT_STAT = 50.0
STAT_FLOOR = -100.0
STAT_CEILING = 200.0

# Field geometry, 1 unit = 4 feet, home plate at the origin, +y toward center field.
# The center field fence sits 100 units out.
FEET_PER_UNIT = 4.0
FIRST_BASE_COORDS = (15.9, 15.9)
FIELDER_COORDS = {
    "P": (0.0, 15.0),
    "C": (0.0, -1.0),
    "1B": (19.0, 24.0),
    "2B": (9.0, 36.0),
    "SS": (-9.0, 36.0),
    "3B": (-19.0, 24.0),
    "LF": (-40.0, 68.0),
    "CF": (0.0, 80.0),
    "RF": (40.0, 68.0),
}

HOME_RUN_DISTANCE = 380.0

# (min ms, max ms, distance in feet at which the max is reached)
FLIGHT_TIME_PROFILE = {
    BallType.GROUNDBALL: (800.0, 1200.0, 200.0),
    BallType.LINEDRIVE: (1000.0, 1500.0, 300.0),
    BallType.FLYBALL: (1500.0, 3000.0, 400.0),
    BallType.POPUP: (2000.0, 3000.0, 150.0),
}

# Simulation defaults (overridable through simulation_params)
DEFAULT_SIM_PARAMS = {
    "regulation_innings": 9,
    "incineration_chance": 0.01,
    "stamina_cost_per_pitch": 0.5,
    "max_pitches_per_game": 2000,
    "verbose": True,
    "seed": None,
}
