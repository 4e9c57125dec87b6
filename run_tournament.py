"""
Script for running tournaments between the Othello bot strategies.
"""
import os
import sys
import argparse
import json
from datetime import datetime
from pathlib import Path

# Add src directory to path
sys.path.append(str(Path(__file__).parent.absolute() / "src"))

from othello.arena import Arena, BotPlayer, ELORatingSystem
from othello.ai import Strategy
from othello.config import Config, get_default_config
from othello.logger import setup_logger


def main():
    parser = argparse.ArgumentParser(description='Run a tournament between Othello bots')

    parser.add_argument('--config', type=str, default=None,
                        help='Path to a JSON config file')
    parser.add_argument('--strategies', nargs='+', default=[s.value for s in Strategy],
                        help='Strategies to enter (random, greedy, minimax or easy/medium/hard)')
    parser.add_argument('--rounds', type=int, default=None,
                        help='Number of rounds to play')
    parser.add_argument('--depth', type=int, default=None,
                        help='Minimax search depth')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for the random strategy')
    parser.add_argument('--opening-book', action='store_true',
                        help='Let bots play from the opening book')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='Directory to save tournament results')
    parser.add_argument('--verbose', action='store_true',
                        help='Log every move')

    args = parser.parse_args()

    if args.config and os.path.exists(args.config):
        config = Config.load(args.config)
    else:
        config = get_default_config()

    if args.rounds is not None:
        config.arena.rounds = args.rounds
    if args.depth is not None:
        config.search.depth = args.depth
    if args.seed is not None:
        config.search.seed = args.seed
    if args.opening_book:
        config.search.use_opening_book = True
    if args.output_dir is not None:
        config.arena.output_dir = args.output_dir
    if args.verbose:
        config.logging.log_level = "DEBUG"

    log = setup_logger(config)
    os.makedirs(config.arena.output_dir, exist_ok=True)

    elo_file = os.path.join(config.arena.output_dir, config.arena.elo_file)
    if os.path.exists(elo_file):
        log.logger.info(f"Loading ELO ratings from {elo_file}")
        elo = ELORatingSystem.load_ratings(elo_file)
    else:
        elo = ELORatingSystem(k=config.arena.k_factor, initial_rating=config.arena.initial_rating)

    arena = Arena(elo_system=elo)
    for name in args.strategies:
        strategy = Strategy.parse(name)
        arena.add_player(BotPlayer(strategy.value, strategy, config.search))

    if len(arena.players) < 2:
        log.logger.error("Need at least 2 distinct strategies to start a tournament")
        log.close()
        return

    log.logger.info(f"Starting tournament with {config.arena.rounds} rounds: "
                    f"{', '.join(arena.players)}")
    results = arena.run_tournament(rounds=config.arena.rounds)
    log.log_metrics({'games_played': results['games_played'],
                     'duration': results['duration']}, step=config.arena.rounds)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    results_file = os.path.join(config.arena.output_dir, f'tournament_{timestamp}.json')
    with open(results_file, 'w') as f:
        json.dump({
            'timestamp': timestamp,
            'rounds': config.arena.rounds,
            'search': config.to_dict()['search'],
            'participants': list(arena.players.keys()),
            'matchups': results['matchups'],
            'leaderboard': [{'player': p['player_id'], 'strategy': p['strategy'],
                             'depth': p['depth'], 'rating': p['rating']}
                            for p in results['leaderboard']]
        }, f, indent=2)

    arena.elo.save_ratings(elo_file)

    print(f"\nTournament completed! Results saved to {results_file}")
    print("\nFinal Leaderboard:")
    print(arena.format_leaderboard())
    log.close()


if __name__ == '__main__':
    main()
