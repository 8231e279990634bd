# elbsim/utils.py

import logging
import math
import sys

FIRST_NAMES = [
    'Alex', 'Jordan', 'Casey', 'Morgan', 'Taylor', 'Riley', 'Quinn',
    'Avery', 'Cameron', 'Dakota', 'Parker', 'Skyler', 'Jamie', 'Rowan',
    'Sam', 'Charlie', 'Jesse', 'Blake', 'Reese', 'Sage', 'River',
    'Phoenix', 'Hayden', 'Peyton', 'Drew', 'Ellis', 'Finley', 'Indigo',
]

LAST_NAMES = [
    'Smith', 'Johnson', 'Williams', 'Brown', 'Jones', 'Garcia', 'Miller',
    'Davis', 'Rodriguez', 'Martinez', 'Hernandez', 'Lopez', 'Gonzalez',
    'Wilson', 'Anderson', 'Thomas', 'Taylor', 'Moore', 'Jackson', 'Martin',
    'Lee', 'Walker', 'Hall', 'Allen', 'Young', 'King', 'Wright', 'Hill',
    'Scott', 'Green', 'Adams', 'Baker', 'Nelson', 'Carter', 'Mitchell',
    'Starfall', 'Moonwhisper', 'Thunderstrike', 'Blazeheart', 'Stormwind',
    'Ashborne', 'Ironside', 'Silverfang', 'Goldleaf', 'Darkwater',
]

TEAM_ADJECTIVES = [
    'Eternal', 'Infinite', 'Cosmic', 'Mystic', 'Blazing', 'Thunder',
    'Shadow', 'Crystal', 'Iron', 'Golden', 'Silver', 'Crimson',
    'Phantom', 'Obsidian', 'Radiant', 'Volcanic', 'Frozen', 'Wild',
]

TEAM_NOUNS = [
    'Dragons', 'Phoenixes', 'Wolves', 'Bears', 'Tigers', 'Eagles',
    'Serpents', 'Lions', 'Hawks', 'Falcons', 'Panthers', 'Vipers',
    'Titans', 'Giants', 'Warriors', 'Knights', 'Reapers', 'Hunters',
]


# Keep level at WARNING by default to reduce console noise
# main.py can adjust if needed via --debug or --show-game-logs
def setup_logging(level=logging.WARNING):
    """Configures basic logging to stderr."""
    logging.basicConfig(level=level,
                        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
                        stream=sys.stderr)


def generate_name(rng):
    return f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"


def generate_team_name(rng):
    return f"{rng.choice(TEAM_ADJECTIVES)} {rng.choice(TEAM_NOUNS)}"


def clamp(value, low, high):
    return max(low, min(high, value))


def distance(p1, p2):
    return math.hypot(p2[0] - p1[0], p2[1] - p1[1])


def ordinal_suffix(number):
    """Returns 'st', 'nd', 'rd' or 'th' for an inning number."""
    j = number % 10
    k = number % 100
    if j == 1 and k != 11:
        return 'st'
    if j == 2 and k != 12:
        return 'nd'
    if j == 3 and k != 13:
        return 'rd'
    return 'th'
