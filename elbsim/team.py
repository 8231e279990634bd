# elbsim/team.py

import copy
import logging
import random
from .constants import *
from .player import Player, generate_player
from .utils import generate_team_name

logger = logging.getLogger(__name__)


class TeamConfigurationError(ValueError):
    """Raised when a team cannot field a legal game."""


class Team:
    """Owns player identity: the batting order, the pitcher and the fielding map."""

    def __init__(self, name, lineup, pitcher, rng=None):
        self.name = name
        self.lineup = list(lineup) # Batting order, list of Player objects
        self.pitcher = pitcher
        self.rng = rng # Draws replacement players; a Game attaches one when None

    @property
    def roster(self):
        players = list(self.lineup)
        if self.pitcher is not None and self.pitcher not in players:
            players.append(self.pitcher)
        return players

    def validate(self):
        """Raises TeamConfigurationError unless the team can take the field."""
        if not self.lineup:
            raise TeamConfigurationError(f"Team '{self.name}' has an empty lineup.")
        if self.pitcher is None:
            raise TeamConfigurationError(f"Team '{self.name}' has no pitcher.")
        missing = [pos for pos in FIELDING_POSITIONS if self.get_player_at_position(pos) is None]
        if missing:
            raise TeamConfigurationError(f"Team '{self.name}' cannot field positions: {', '.join(missing)}")
        ids = [player.id for player in self.roster]
        if len(ids) != len(set(ids)):
            raise TeamConfigurationError(f"Team '{self.name}' has duplicate player ids.")

    def get_player_at_position(self, position):
        if position == PITCHER:
            return self.pitcher
        for player in self.lineup:
            if player.position == position:
                return player
        return None

    def get_player(self, player_id):
        for player in self.roster:
            if player.id == player_id:
                return player
        return None

    def replace_player(self, old_player, new_player):
        """Swaps a player everywhere the team references them."""
        replaced = False
        for index, player in enumerate(self.lineup):
            if player.id == old_player.id:
                self.lineup[index] = new_player
                new_player.position = old_player.position
                replaced = True
        if self.pitcher is not None and self.pitcher.id == old_player.id:
            self.pitcher = new_player
            replaced = True
        return replaced

    def incinerate_and_replace(self, player):
        """Removes a player for good and returns their freshly generated replacement."""
        if self.rng is None:
            raise TeamConfigurationError(f"Team '{self.name}' has no RNG to generate replacements with.")
        new_id = None
        while new_id is None or self.get_player(new_id) is not None:
            new_id = f"P{self.rng.randint(100000, 999999)}"
        new_player = generate_player(self.rng, player.position, is_pitcher=player.is_pitcher, player_id=new_id)
        if not self.replace_player(player, new_player):
            logger.warning(f"Incinerated player {player.id} was not on team '{self.name}'.")
        logger.info(f"{player.name} ({player.id}) replaced by {new_player.name} ({new_player.id}) on {self.name}")
        return new_player

    def reorder_lineup(self, new_order):
        """Applies a batting order given as player ids. Returns False if it is not a permutation."""
        by_id = {player.id: player for player in self.lineup}
        if sorted(new_order) != sorted(by_id):
            logger.warning(f"Rejected batting order for {self.name}: {new_order}")
            return False
        self.lineup = [by_id[player_id] for player_id in new_order]
        return True

    def clone(self, rng=None):
        """Independent copy for a single game, so incinerations stay in that game."""
        team = copy.deepcopy(self)
        if rng is not None:
            team.rng = rng
        return team

    def rest_pitchers(self):
        for player in self.roster:
            if player.is_pitcher:
                player.rest()

    def team_rating(self):
        roster = self.roster
        if not roster:
            return DEFAULT_STAT
        return round(sum(player.overall_rating() for player in roster) / len(roster))

    def to_dict(self):
        return {
            "name": self.name,
            "pitcher": self.pitcher.to_dict() if self.pitcher else None,
            "lineup": [player.to_dict() for player in self.lineup],
        }

    @classmethod
    def from_config(cls, data, rng=None):
        """Builds a team from a YAML team entry."""
        try:
            name = data['name']
            pitcher_data = data['pitcher']
            pitcher = Player(pitcher_data['id'], pitcher_data['name'], PITCHER,
                             pitcher_data.get('stats', {}), is_pitcher=True)
            lineup = [
                Player(entry['id'], entry['name'], entry['position'], entry.get('stats', {}))
                for entry in data.get('lineup', [])
            ]
        except KeyError as e:
            logger.error(f"Missing key {e} in team data.")
            raise ValueError(f"Configuration error: missing key {e} in team data") from e
        team = cls(name, lineup, pitcher, rng=rng)
        logger.debug(f"Loaded team {name} with {len(lineup)} batters.")
        return team

    def __repr__(self):
        return f"Team({self.name})"


def generate_team(rng, name=None):
    """Creates a random team with a full defensive lineup plus a designated hitter."""
    team_name = name or generate_team_name(rng)
    lineup = [generate_player(rng, position) for position in LINEUP_POSITIONS]
    pitcher = generate_player(rng, PITCHER, is_pitcher=True)
    team = Team(team_name, lineup, pitcher, rng=random.Random(rng.randint(0, 2**32)))
    # Generated ids may collide in theory; regenerate until the roster is unique
    seen = set()
    for player in team.roster:
        while player.id in seen:
            player.id = f"P{rng.randint(100000, 999999)}"
        seen.add(player.id)
    return team
