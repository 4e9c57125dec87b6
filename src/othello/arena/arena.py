"""
Arena for running tournaments between Othello bots with ELO rating.
"""
import json
import logging
import os
import time
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Dict, List, Optional, Union

from tqdm import tqdm

from ..config import ArenaConfig, SearchConfig
from ..ai.search import OthelloBot, Strategy
from ..game import ReversiGame, TileValue

logger = logging.getLogger(__name__)


def expected_score(rating: float, opponent_rating: float) -> float:
    """Expected score of a player rated ``rating`` against ``opponent_rating``."""
    return 1.0 / (1.0 + 10.0 ** ((opponent_rating - rating) / 400.0))


@dataclass
class PlayerRecord:
    """Rating and results of one bot, with the settings it played under."""
    rating: float
    strategy: Optional[str] = None
    depth: Optional[int] = None
    wins: int = 0
    losses: int = 0
    draws: int = 0

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.draws


class ELORatingSystem:
    """
    ELO ratings for bots, updated one game at a time.

    Results are always given from Black's side: 1.0 Black won, 0.5 draw,
    0.0 White won. Each update moves both ratings by the same amount in
    opposite directions.
    """

    def __init__(self, k: float = 32, initial_rating: float = 1500.0):
        self.k = k
        self.initial_rating = initial_rating
        self.players: Dict[str, PlayerRecord] = {}
        self.history: List[Dict] = []

    def register(self, player_id: str, strategy: Optional[str] = None,
                 depth: Optional[int] = None) -> PlayerRecord:
        """Get the record for ``player_id``, creating it at the initial rating."""
        record = self.players.setdefault(player_id, PlayerRecord(self.initial_rating))
        if strategy is not None:
            record.strategy = strategy
            record.depth = depth
        return record

    def record_game(self, black_id: str, white_id: str, result: float) -> Dict:
        """
        Rate a finished game.

        Args:
            black_id: Player that had Black
            white_id: Player that had White
            result: Black's score (1.0, 0.5 or 0.0)

        Returns:
            The game entry appended to ``history``
        """
        black = self.register(black_id)
        white = self.register(white_id)
        delta = self.k * (result - expected_score(black.rating, white.rating))

        entry = {
            'black': black_id,
            'white': white_id,
            'result': result,
            'black_strategy': black.strategy,
            'white_strategy': white.strategy,
            'black_depth': black.depth,
            'white_depth': white.depth,
            'elo_black_before': black.rating,
            'elo_white_before': white.rating,
        }

        black.rating += delta
        white.rating -= delta
        if result == 1.0:
            black.wins += 1
            white.losses += 1
        elif result == 0.0:
            black.losses += 1
            white.wins += 1
        else:
            black.draws += 1
            white.draws += 1

        entry['elo_black_after'] = black.rating
        entry['elo_white_after'] = white.rating
        self.history.append(entry)
        return entry

    def get_leaderboard(self) -> List[Dict]:
        """Players sorted by rating, best first."""
        leaderboard = [
            dict(asdict(record), player_id=player_id, games_played=record.games_played)
            for player_id, record in self.players.items()
        ]
        leaderboard.sort(key=lambda x: x['rating'], reverse=True)
        return leaderboard

    def save_ratings(self, filepath: str):
        data = {
            'k': self.k,
            'initial_rating': self.initial_rating,
            'players': {player_id: asdict(record) for player_id, record in self.players.items()},
            'history': self.history,
            'last_updated': datetime.now().isoformat()
        }
        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2)

    @classmethod
    def load_ratings(cls, filepath: str) -> 'ELORatingSystem':
        with open(filepath, 'r') as f:
            data = json.load(f)

        elo = cls(k=data['k'], initial_rating=data['initial_rating'])
        elo.players = {player_id: PlayerRecord(**record)
                       for player_id, record in data['players'].items()}
        elo.history = data.get('history', [])
        return elo


class BotPlayer:
    """An arena entrant backed by an OthelloBot."""

    def __init__(self, player_id: str, strategy: Union[str, Strategy],
                 config: Optional[SearchConfig] = None):
        """
        Initialize a bot player.

        Args:
            player_id: Unique identifier for the player
            strategy: Strategy or difficulty alias for the underlying bot
            config: Search parameters
        """
        self.player_id = player_id
        self.bot = OthelloBot(strategy, TileValue.BLACK, config)

    @property
    def depth(self) -> Optional[int]:
        """Search depth, for the strategies that search."""
        return self.bot.config.depth if self.bot.strategy == Strategy.MINIMAX else None

    def get_move(self, game: ReversiGame):
        """Get the next move for the side to move, or None to pass."""
        self.bot.player = game.get_current_player()
        return self.bot.select_move(game.board, game.get_move_history())


class Arena:
    """Arena for running tournaments between bots."""

    def __init__(self, elo_system: Optional[ELORatingSystem] = None):
        """
        Initialize the arena.

        Args:
            elo_system: Optional ELO rating system to use
        """
        self.elo = elo_system if elo_system is not None else ELORatingSystem()
        self.players: Dict[str, BotPlayer] = {}

    @classmethod
    def from_config(cls, config: ArenaConfig) -> 'Arena':
        return cls(ELORatingSystem(k=config.k_factor, initial_rating=config.initial_rating))

    def add_player(self, player: BotPlayer):
        """Add a player to the arena."""
        self.players[player.player_id] = player
        self.elo.register(player.player_id, player.bot.strategy.value, player.depth)

    def play_game(self, black_id: str, white_id: str) -> float:
        """
        Play a single game between two players.

        Args:
            black_id: ID of the player taking Black (moves first)
            white_id: ID of the player taking White

        Returns:
            1.0 if Black wins, 0.5 for a draw, 0.0 if White wins
        """
        if black_id not in self.players or white_id not in self.players:
            raise ValueError(f"One or both players not found: {black_id}, {white_id}")

        sides = {
            TileValue.BLACK: self.players[black_id],
            TileValue.WHITE: self.players[white_id],
        }
        game = ReversiGame(black_player_id=black_id, white_player_id=white_id)
        logger.debug("Starting game: %s (Black) vs %s (White)", black_id, white_id)

        while not game.is_game_over():
            current = sides[game.get_current_player()]
            move = current.get_move(game)
            if move is None:
                game.pass_turn()
                logger.debug("%s passes", current.player_id)
            else:
                game.make_move(move)
                logger.debug("%s plays at %s", current.player_id, move)

        black_count, white_count = game.get_score()
        logger.debug("Game over. Black: %d, White: %d", black_count, white_count)

        if black_count > white_count:
            return 1.0
        elif white_count > black_count:
            return 0.0
        return 0.5

    def run_tournament(self, rounds: int = 10, show_progress: bool = True) -> Dict:
        """
        Run a round-robin tournament between all players.

        Args:
            rounds: Number of rounds to play (each pair meets once per round)
            show_progress: Whether to display a progress bar

        Returns:
            Dictionary with tournament results
        """
        player_ids = list(self.players.keys())
        num_players = len(player_ids)

        if num_players < 2:
            raise ValueError("Need at least 2 players for a tournament")

        pairs = [(player_ids[i], player_ids[j])
                 for i in range(num_players) for j in range(i + 1, num_players)]

        results = {
            'games_played': 0,
            'matchups': {},
            'start_time': time.time(),
            'end_time': None,
            'rounds': []
        }
        for p1, p2 in pairs:
            results['matchups'][f"{p1}_vs_{p2}"] = {
                'player1': p1,
                'player2': p2,
                'games_played': 0,
                'wins1': 0,
                'wins2': 0,
                'draws': 0
            }

        progress = tqdm(total=rounds * len(pairs), desc="Tournament", disable=not show_progress)
        for round_num in range(rounds):
            round_results = {'round': round_num + 1, 'games': []}

            for index, (p1, p2) in enumerate(pairs):
                # Alternate who plays Black
                black, white = (p2, p1) if (index + round_num) % 2 else (p1, p2)

                result = self.play_game(black, white)
                record = self.elo.record_game(black, white, result)

                matchup = results['matchups'][f"{p1}_vs_{p2}"]
                matchup['games_played'] += 1
                results['games_played'] += 1
                score_p1 = result if black == p1 else 1.0 - result
                if score_p1 == 1.0:
                    matchup['wins1'] += 1
                elif score_p1 == 0.0:
                    matchup['wins2'] += 1
                else:
                    matchup['draws'] += 1

                round_results['games'].append(record)
                progress.update(1)

            results['rounds'].append(round_results)
            logger.info("Round %d complete: %s", round_num + 1,
                        ", ".join(f"{p['player_id']}={p['rating']:.1f}"
                                  for p in self.elo.get_leaderboard()))
        progress.close()

        results['end_time'] = time.time()
        results['duration'] = results['end_time'] - results['start_time']
        results['leaderboard'] = self.elo.get_leaderboard()

        return results

    def format_leaderboard(self) -> str:
        """Format the current leaderboard as a table."""
        lines = [
            "Rank  Player ID               Strategy  Depth   Rating    W    L    D",
            "----  ---------------------  --------  -----  -------  ---  ---  ---",
        ]
        for i, player in enumerate(self.elo.get_leaderboard(), 1):
            depth = '-' if player['depth'] is None else str(player['depth'])
            lines.append(f"{i:4d}  {player['player_id']:22s}  {player['strategy'] or '-':8s}  "
                         f"{depth:>5s}  {player['rating']:7.1f}  {player['wins']:3d}  "
                         f"{player['losses']:3d}  {player['draws']:3d}")
        return "\n".join(lines)

    def save_results(self, filepath: str):
        """Save the leaderboard to a JSON file and the ratings beside it."""
        os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)
        elo_file = os.path.splitext(filepath)[0] + '_elo.json'
        self.elo.save_ratings(elo_file)

        with open(filepath, 'w') as f:
            json.dump(self.elo.get_leaderboard(), f, indent=2)
