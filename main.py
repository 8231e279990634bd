# main.py

import logging
import argparse
import os
import sys
import csv
from elbsim.simulator import Simulator
from elbsim.utils import setup_logging

CONFIG_FILE = os.path.join("data", "config.yaml")
DEFAULT_OUTPUT_DIR = "logs"


def parse_bool(value):
    return str(value).lower() not in ('false', '0', 'no')


def main():
    parser = argparse.ArgumentParser(description="Eternal League Baseball game simulator")
    parser.add_argument('--config', type=str, default=CONFIG_FILE,
                        help='Path to the YAML configuration file.')
    parser.add_argument('--lineup', required=False, nargs='+', default=None,
                        help='Home team batting order as player IDs. If omitted, uses the order from the teams file.')
    parser.add_argument('--num-games', type=int, default=None,
                        help='Override the number of games from config.yaml.')
    parser.add_argument('--seed', type=int, default=None,
                        help='Override the random seed from config.yaml.')
    parser.add_argument('--csv', type=str, default=None,
                        help='CSV file (inside the output dir) to append the home win percentage to. Disables verbose YAML output.')
    parser.add_argument('--verbose', default=None,
                        help='Keep full play-by-play logs and save them to YAML (e.g. --verbose True or --verbose False).')
    parser.add_argument('--debug', action='store_true', help='Enable DEBUG level logging for all modules.')
    parser.add_argument('--show-game-logs', action='store_true',
                        help='Show play-by-play logs from the game simulation on stderr.')
    parser.add_argument('--save-yaml', action='store_true',
                        help='Force saving the detailed YAML results, even when using --csv.')
    parser.add_argument('--output-dir', type=str, default=DEFAULT_OUTPUT_DIR,
                        help='Directory for YAML and CSV output.')

    args = parser.parse_args()

    if args.csv:
        verbose_mode = False
    elif args.verbose is not None:
        verbose_mode = parse_bool(args.verbose)
    else:
        verbose_mode = True

    root_log_level = logging.DEBUG if args.debug else logging.WARNING
    setup_logging(level=root_log_level)
    logger = logging.getLogger(__name__)

    if args.show_game_logs:
        logging.getLogger('elbsim.game').setLevel(logging.INFO)
    elif not args.debug:
        logging.getLogger('elbsim.game').setLevel(logging.WARNING)

    logger.debug(f"Command line args: {args}")

    try:
        simulator = Simulator(config_path=args.config, seed=args.seed)

        lineup_to_use = args.lineup or simulator.get_default_lineup_ids()
        logger.info(f"Home batting order: {' '.join(lineup_to_use)}")

        simulator.run_simulations(lineup_ids=lineup_to_use, verbose=verbose_mode, num_games=args.num_games)
        win_pct = simulator.get_home_win_pct()

        if args.save_yaml or verbose_mode:
            yaml_path = os.path.join(args.output_dir, "simulation_results.yaml")
            logger.info(f"Saving results to {yaml_path}")
            simulator.save_results_yaml(yaml_path)
            simulator.save_results_csv(os.path.join(args.output_dir, "game_results.csv"))

        if not verbose_mode and not args.save_yaml:
            # Picked up by orchestrator.py
            print(f"{win_pct:.4f}", end='')
        else:
            averages = simulator.get_average_runs()
            print(f"{simulator.away_team.name} at {simulator.home_team.name}: "
                  f"home win pct {win_pct:.3f}, avg runs {averages['away']:.2f}-{averages['home']:.2f}")

        if args.csv:
            os.makedirs(args.output_dir, exist_ok=True)
            csv_path = os.path.join(args.output_dir, args.csv)
            try:
                with open(csv_path, 'a', newline='') as f:
                    writer = csv.writer(f)
                    writer.writerow(list(lineup_to_use) + [f"{win_pct:.4f}"])
                logger.info(f"Appended home win pct to {csv_path}")
            except IOError as e:
                logger.error(f"Failed to append result to CSV {csv_path}: {e}")

    except FileNotFoundError as e:
        logger.error(f"Fatal Error: Missing file - {e}. Exiting.")
        sys.exit(1)
    except ValueError as e:
        logger.error(f"Fatal Error: Configuration, Lineup, or Validation error - {e}. Exiting.")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"An unexpected fatal error occurred during simulation run: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
