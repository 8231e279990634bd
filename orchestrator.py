# orchestrator.py

import itertools
import subprocess
import yaml
import os
import sys
import csv
import logging
import datetime
import argparse
from math import factorial
import pandas as pd
from elbsim.simulator import Simulator
from elbsim.utils import setup_logging

CONFIG_FILE = os.path.join("data", "config.yaml")
RESULTS_BASE_DIR = "results"
SCORE_COLUMN = "HomeWinPct"

logger = logging.getLogger("elbsim.orchestrator")


def load_orchestrator_config(config_path):
    """Loads simulation params, orchestrator params and the home batting order."""
    with open(config_path, 'r') as f:
        config_data = yaml.safe_load(f) or {}
    sim_params = config_data.get('simulation_params', {})
    orch_params = config_data.get('orchestrator_params', {})
    player_ids = Simulator(config_path).get_default_lineup_ids()
    if len(player_ids) != len(set(player_ids)):
        raise ValueError("Duplicate player IDs found in the home lineup.")
    logger.info(f"Successfully loaded {len(player_ids)} home player IDs.")
    return sim_params, orch_params, player_ids


def csv_header(lineup_size):
    return [f"P{i+1}_ID" for i in range(lineup_size)] + [SCORE_COLUMN]


def rank_lineups(csv_path, top_n):
    """Returns the top N batting orders from a results CSV, best first."""
    df = pd.read_csv(csv_path, dtype=str)
    df[SCORE_COLUMN] = df[SCORE_COLUMN].astype(float)
    id_columns = [column for column in df.columns if column != SCORE_COLUMN]
    top = df.sort_values(by=SCORE_COLUMN, ascending=False, kind="mergesort").head(top_n)
    return [(tuple(row[column] for column in id_columns), float(row[SCORE_COLUMN])) for _, row in top.iterrows()]


def run_simulation_for_lineup(lineup_perm, num_games, run_output_dir, config_path):
    """Runs main.py for a single batting order and returns the home win percentage."""
    command = [
        sys.executable, 'main.py',
        '--config', config_path,
        '--lineup'] + list(lineup_perm) + [
        '--verbose', 'False',
        '--output-dir', run_output_dir,
        '--num-games', str(num_games),
    ]
    logger.debug(f"Running: {' '.join(command)}")
    try:
        process = subprocess.run(command, check=True, capture_output=True, text=True, encoding='utf-8')
    except subprocess.CalledProcessError as e:
        logger.error(f"main.py failed (exit {e.returncode}) for batting order {' '.join(lineup_perm)}:\n{e.stderr}")
        raise
    win_pct_str = process.stdout.strip()
    try:
        return float(win_pct_str)
    except ValueError:
        logger.error(f"Could not convert stdout ('{win_pct_str}') to float for lineup {lineup_perm}.")
        raise


def simulate_lineups(lineups, num_games, run_output_dir, csv_path, config_path):
    """Simulates each batting order and writes one CSV row per order."""
    lineups = list(lineups)
    with open(csv_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(csv_header(len(lineups[0]) if lineups else 0))
        for i, lineup_perm in enumerate(lineups):
            logger.info(f"--- Sim {i+1}/{len(lineups)} (Games: {num_games}) --- Lineup: {' '.join(lineup_perm)}")
            win_pct = run_simulation_for_lineup(lineup_perm, num_games, run_output_dir, config_path)
            logger.info(f"Home win pct: {win_pct:.4f}")
            writer.writerow(list(lineup_perm) + [f"{win_pct:.4f}"])
            f.flush()


def main():
    parser = argparse.ArgumentParser(description="Search home batting orders and optionally rerun the best ones.")
    parser.add_argument('--config', type=str, default=CONFIG_FILE, help='Path to the YAML configuration file.')
    parser.add_argument('--start', type=int, default=0, help='Starting index (0-based) of permutations to simulate.')
    parser.add_argument('--stop', type=int, default=None, help='Stopping index (exclusive) of permutations to simulate.')
    parser.add_argument('--num-games', type=int, default=None, help='Override the number of games per batting order for the initial run.')
    parser.add_argument('--debug', action='store_true', help='Enable DEBUG level logging.')
    parser.add_argument('--rerun', type=int, nargs=2, metavar=('TOP_N', 'NUM_GAMES'), default=None,
                        help='Rerun the TOP_N batting orders with NUM_GAMES games each. Overrides config auto_rerun settings.')
    args = parser.parse_args()

    setup_logging(level=logging.DEBUG if args.debug else logging.INFO)

    try:
        sim_params, orch_params, player_ids = load_orchestrator_config(args.config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Could not load the config or the home batting order: {e}")
        sys.exit(1)

    initial_num_games = args.num_games or sim_params.get("num_games", 100)

    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    run_output_dir = os.path.join(RESULTS_BASE_DIR, timestamp)
    os.makedirs(run_output_dir, exist_ok=True)
    logger.info(f"Writing results under {run_output_dir}")

    total_possible_perms = factorial(len(player_ids))
    start_index = args.start
    stop_index = args.stop if args.stop is not None else total_possible_perms
    if not (0 <= start_index < stop_index <= total_possible_perms):
        logger.error(f"Invalid permutation slice [{start_index}, {stop_index}) of {total_possible_perms}.")
        sys.exit(1)

    permutations_to_run = list(itertools.islice(itertools.permutations(player_ids), start_index, stop_index))
    initial_csv_path = os.path.join(run_output_dir, f"{initial_num_games}_game_results.csv")
    logger.info(f"Simulating {len(permutations_to_run)} batting orders; results in {initial_csv_path}")

    try:
        simulate_lineups(permutations_to_run, initial_num_games, run_output_dir, initial_csv_path, args.config)
    except (subprocess.CalledProcessError, ValueError, IOError) as e:
        logger.error(f"Initial run failed: {e}. Stopping orchestrator.")
        sys.exit(1)

    if args.rerun:
        rerun_top_n, rerun_num_games = args.rerun
    elif orch_params.get('auto_rerun', False):
        rerun_top_n = orch_params.get('rerun_top_n', 10)
        rerun_num_games = orch_params.get('rerun_num_games', 1000)
    else:
        logger.info("No rerun requested. Done.")
        return

    if rerun_top_n <= 0 or rerun_num_games <= 0:
        logger.error(f"Rerun needs a positive TOP_N and NUM_GAMES, got {rerun_top_n} and {rerun_num_games}.")
        sys.exit(1)

    try:
        top_lineups = rank_lineups(initial_csv_path, rerun_top_n)
        for rank, (lineup, win_pct) in enumerate(top_lineups, start=1):
            logger.debug(f"  Rank {rank}: {lineup} (Home win pct: {win_pct:.4f})")
        rerun_csv_path = os.path.join(run_output_dir, f"{rerun_num_games}_game_results.csv")
        simulate_lineups([lineup for lineup, _ in top_lineups], rerun_num_games, run_output_dir,
                         rerun_csv_path, args.config)
        logger.info(f"Rerun results saved to '{rerun_csv_path}'")
    except pd.errors.EmptyDataError:
        logger.error(f"No batting orders in {initial_csv_path} to rerun.")
        sys.exit(1)
    except (subprocess.CalledProcessError, ValueError, KeyError, IOError) as e:
        logger.error(f"Rerun phase failed: {e}")
        sys.exit(1)

    logger.info("Orchestrator finished.")


if __name__ == "__main__":
    main()
