# elbsim/simulator.py

import yaml
import os
import logging
import random
import pandas as pd
from .constants import *
from .game import Game
from .team import Team, generate_team

logger = logging.getLogger(__name__)


class Simulator:
    """Runs a series of games between two teams and saves the results."""

    def __init__(self, config_path, seed=None):
        self.config_path = config_path
        self.config = self._load_config(config_path)
        self.simulation_params = dict(DEFAULT_SIM_PARAMS)
        self.simulation_params.update(self.config.get('simulation_params') or {})
        if seed is not None:
            self.simulation_params['seed'] = seed
        self.rng = random.Random(self.simulation_params.get('seed'))
        self.home_team, self.away_team = self._load_teams()
        self.results = [] # One run_game() dict per game

    def _load_config(self, config_path):
        """Reads config.yaml; simulation_params is the only required section."""
        logger.info(f"Reading config {config_path}")
        try:
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f)
        except FileNotFoundError:
            logger.error(f"Config file {config_path} does not exist")
            raise
        except yaml.YAMLError as e:
            logger.error(f"Config file {config_path} is not valid YAML: {e}")
            raise
        if not isinstance(config_data, dict) or 'simulation_params' not in config_data:
            logger.error("Configuration is missing the 'simulation_params' section.")
            raise ValueError("Configuration must contain a 'simulation_params' section.")
        return config_data

    def _load_teams(self):
        """Builds both teams from the teams data file, or generates them when none is configured."""
        teams_file = self.config.get('teams_data_file')
        if not teams_file:
            logger.info("No teams_data_file configured. Generating both teams.")
            return generate_team(self.rng), generate_team(self.rng)

        # Relative paths resolve from the working directory first, then next to the config file
        if not os.path.isabs(teams_file) and not os.path.exists(teams_file):
            teams_file = os.path.join(os.path.dirname(os.path.abspath(self.config_path)), teams_file)
        logger.info(f"Loading teams from: {teams_file}")
        try:
            with open(teams_file, 'r') as f:
                teams_data = yaml.safe_load(f)
        except FileNotFoundError:
            logger.error(f"Error: Teams data file not found at {teams_file}")
            raise
        except yaml.YAMLError as e:
            logger.error(f"Error parsing teams YAML: {e}")
            raise

        if not isinstance(teams_data, dict) or 'home' not in teams_data or 'away' not in teams_data:
            raise ValueError(f"Teams data file {teams_file} must contain 'home' and 'away' entries.")
        home = Team.from_config(teams_data['home'], rng=random.Random(self.rng.randint(0, 2**32)))
        away = Team.from_config(teams_data['away'], rng=random.Random(self.rng.randint(0, 2**32)))
        home.validate()
        away.validate()
        logger.info(f"Loaded teams: {away.name} at {home.name}")
        return home, away

    def validate_lineup(self, lineup_ids):
        """Checks that the ids are a reordering of the home team's batting order."""
        current_ids = [player.id for player in self.home_team.lineup]
        if len(lineup_ids) != len(current_ids):
            raise ValueError(f"Invalid lineup: Must contain exactly {len(current_ids)} player IDs, found {len(lineup_ids)}.")

        unknown_ids = [p_id for p_id in lineup_ids if p_id not in current_ids]
        if unknown_ids:
            raise ValueError(f"Invalid lineup: Unknown player IDs found: {', '.join(unknown_ids)}")

        if len(lineup_ids) != len(set(lineup_ids)):
            raise ValueError(f"Invalid lineup: Duplicate player IDs found in requested order: {lineup_ids}")

        return True

    def get_default_lineup_ids(self):
        return [player.id for player in self.home_team.lineup]

    def run_simulations(self, lineup_ids=None, verbose=True, num_games=None):
        """Plays the configured number of games, optionally with a new home batting order."""
        self.simulation_params['verbose'] = verbose

        if lineup_ids:
            self.validate_lineup(lineup_ids)
            self.home_team.reorder_lineup(list(lineup_ids))

        num_games = num_games if num_games is not None else self.simulation_params.get('num_games', 1)
        logger.info(f"Starting simulation of {num_games} game(s): {self.away_team.name} at {self.home_team.name}...")

        self.results = []
        for i in range(num_games):
            game_id = i + 1
            home = self.home_team.clone(random.Random(self.rng.randint(0, 2**32)))
            away = self.away_team.clone(random.Random(self.rng.randint(0, 2**32)))
            home.rest_pitchers()
            away.rest_pitchers()
            game = Game(home, away,
                        sim_params=self.simulation_params,
                        rng=random.Random(self.rng.randint(0, 2**32)),
                        game_id=game_id)
            game_result = game.run_game()
            self.results.append(game_result)
            if verbose:
                score = game_result['final_score']
                logger.info(f"Game {game_id}: {self.away_team.name} {score['away']}, {self.home_team.name} {score['home']}")
            elif game_id % max(1, num_games // 10) == 0:
                logger.info(f"{game_id}/{num_games} games played")

        logger.info(f"Simulation finished. Home win pct: {self.get_home_win_pct():.3f}")

    def results_frame(self):
        """One row per game with scores and event counters."""
        rows = []
        for result in self.results:
            row = {
                "game_id": result['game_id'],
                "home_score": result['final_score']['home'],
                "away_score": result['final_score']['away'],
                "winner": result['winner'],
                "innings": result['innings'],
                "pitches": result['pitches'],
            }
            row.update(result['game_events'])
            rows.append(row)
        return pd.DataFrame(rows, columns=[
            "game_id", "home_score", "away_score", "winner", "innings", "pitches",
            "home_runs", "strikeouts", "stolen_bases", "rbis", "incinerations", "injuries",
        ])

    def get_home_win_pct(self):
        frame = self.results_frame()
        if frame.empty:
            return 0.0
        return float((frame['home_score'] > frame['away_score']).mean())

    def get_average_runs(self):
        frame = self.results_frame()
        if frame.empty:
            return {"home": 0.0, "away": 0.0}
        return {"home": float(frame['home_score'].mean()), "away": float(frame['away_score'].mean())}

    def save_results_csv(self, output_path):
        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
        self.results_frame().to_csv(output_path, index=False)
        logger.info(f"Per-game results saved to {output_path}")

    def save_results_yaml(self, output_path):
        """Writes the series summary and every game result as YAML."""
        try:
            os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
        except OSError as e:
            logger.error(f"Cannot create the output directory for {output_path}: {e}")
            raise

        logger.debug(f"Writing {len(self.results)} game results to {output_path}")
        output_data = {
            "simulation_summary": {
                "games": len(self.results),
                "home_team": self.home_team.name,
                "away_team": self.away_team.name,
                "home_win_pct": self.get_home_win_pct(),
                "average_runs": self.get_average_runs(),
                "team_ratings": {"home": self.home_team.team_rating(), "away": self.away_team.team_rating()},
                "lineup_order": self.get_default_lineup_ids(),
            },
            "game_details": self.results,
        }
        try:
            with open(output_path, 'w') as f:
                yaml.dump(output_data, f, default_flow_style=False, sort_keys=False, indent=2, allow_unicode=True)
            logger.info(f"Results saved to {output_path}")
        except IOError as e:
            logger.error(f"Failed to write {output_path}: {e}")
            raise
