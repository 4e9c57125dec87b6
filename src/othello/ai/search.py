"""
AI move selection for Othello.

Three strategies of increasing strength:

- random: uniform choice over the legal moves
- greedy: one-ply lookahead maximising the disc differential
- minimax: fixed-depth minimax with alpha-beta pruning over the positional
  evaluation in ``evaluator``

Every lookahead runs on board clones, so the board passed in by the caller is
never modified. The search is synchronous and has no time budget; callers that
need bounded latency must run it off the interactive thread or cap the depth.
"""
import logging
import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Union

import numpy as np

from ..config import SearchConfig
from ..game.board import Board, Coordinate, TileValue
from ..game.moves import get_valid_moves
from ..game.rules import apply_move
from .evaluator import disc_differential, evaluate_position
from .opening_book import HistoryItem, lookup_opening_book

logger = logging.getLogger(__name__)


class Strategy(Enum):
    RANDOM = "random"
    GREEDY = "greedy"
    MINIMAX = "minimax"

    @classmethod
    def parse(cls, value: Union[str, 'Strategy']) -> 'Strategy':
        """Accept a strategy, its name, or a difficulty alias (easy/medium/hard)."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        key = DIFFICULTY_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown strategy: {value!r}") from None


DIFFICULTY_ALIASES = {
    'easy': Strategy.RANDOM.value,
    'medium': Strategy.GREEDY.value,
    'hard': Strategy.MINIMAX.value,
}


@dataclass
class SearchStats:
    """Counters from the most recent minimax search."""
    nodes: int = 0
    leaves: int = 0
    cutoffs: int = 0
    elapsed: float = 0.0


class OthelloBot:
    """
    AI opponent that picks a move for a fixed side.

    Each call is independent: the bot keeps no state between moves other than
    its settings, its random generator and the stats of its last search.
    """

    def __init__(self, strategy: Union[str, Strategy] = Strategy.GREEDY,
                 player: TileValue = TileValue.WHITE,
                 config: Optional[SearchConfig] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize the bot.

        Args:
            strategy: Move selection strategy or difficulty alias
            player: Side the bot plays and scores positions for
            config: Search parameters (default: SearchConfig())
            rng: Random generator for the random strategy. Seeded from
                config.seed when omitted.
        """
        self.strategy = Strategy.parse(strategy)
        self.player = TileValue(player)
        self.config = config or SearchConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.last_stats = SearchStats()

    def select_move(self, board: Board,
                    history: Optional[Sequence[HistoryItem]] = None) -> Optional[Coordinate]:
        """
        Choose a move for the side to move on ``board``.

        Args:
            board: Current position (not modified)
            history: Moves played so far, used for opening book lookups

        Returns:
            (col, row) of the chosen move, or None if there is no legal move
        """
        valid_moves = get_valid_moves(board)
        if not valid_moves:
            return None

        if self.config.use_opening_book and history is not None:
            book_move = lookup_opening_book(history)
            if book_move in valid_moves:
                logger.debug("Opening book move %s", book_move)
                return book_move

        if self.strategy == Strategy.RANDOM:
            return self._random_move(valid_moves)
        elif self.strategy == Strategy.GREEDY:
            return self._greedy_move(board, valid_moves)
        return self._minimax_move(board, valid_moves)

    def _random_move(self, valid_moves: List[Coordinate]) -> Coordinate:
        return valid_moves[int(self.rng.integers(len(valid_moves)))]

    def _greedy_move(self, board: Board, valid_moves: List[Coordinate]) -> Coordinate:
        """One-ply lookahead on disc differential. Ties go to the earliest move."""
        best_move = valid_moves[0]
        best_score = -math.inf

        for move in valid_moves:
            child = _simulate(board, move)
            move_score = disc_differential(child, self.player)
            if move_score > best_score:
                best_score = move_score
                best_move = move

        return best_move

    def _minimax_move(self, board: Board, valid_moves: List[Coordinate]) -> Coordinate:
        """
        Root of the minimax search.

        Alpha is raised to the best score found so far after each root move;
        beta stays unbounded at the root. Ties go to the earliest move.
        """
        self.last_stats = SearchStats()
        start = time.perf_counter()

        depth = self.config.depth
        best_move = valid_moves[0]
        best_score = -math.inf
        alpha = -math.inf
        beta = math.inf

        for move in valid_moves:
            child = _simulate(board, move)
            move_score = self._minimax(child, depth - 1, alpha, beta, False)
            if move_score > best_score:
                best_score = move_score
                best_move = move
            alpha = max(alpha, best_score)

        self.last_stats.elapsed = time.perf_counter() - start
        logger.debug(
            "Minimax depth %d chose %s (score=%s, nodes=%d, leaves=%d, cutoffs=%d, %.3fs)",
            depth, best_move, best_score, self.last_stats.nodes, self.last_stats.leaves,
            self.last_stats.cutoffs, self.last_stats.elapsed,
        )
        return best_move

    def _minimax(self, board: Board, depth: int, alpha: float, beta: float,
                 maximizing: bool) -> float:
        """
        Alpha-beta minimax from the bot's point of view.

        A node is a leaf at depth 0 or when the side to move has no legal
        move. A forced pass is scored as it stands rather than searched
        through.
        """
        self.last_stats.nodes += 1
        valid_moves = get_valid_moves(board)

        if depth == 0 or not valid_moves:
            self.last_stats.leaves += 1
            return evaluate_position(board, self.player, self.config.mobility_weight)

        if maximizing:
            max_eval = -math.inf
            for move in valid_moves:
                evaluation = self._minimax(_simulate(board, move), depth - 1, alpha, beta, False)
                max_eval = max(max_eval, evaluation)
                alpha = max(alpha, evaluation)
                if beta <= alpha:
                    self.last_stats.cutoffs += 1
                    break
            return max_eval
        else:
            min_eval = math.inf
            for move in valid_moves:
                evaluation = self._minimax(_simulate(board, move), depth - 1, alpha, beta, True)
                min_eval = min(min_eval, evaluation)
                beta = min(beta, evaluation)
                if beta <= alpha:
                    self.last_stats.cutoffs += 1
                    break
            return min_eval


def _simulate(board: Board, move: Coordinate) -> Board:
    """Play ``move`` on a private clone of ``board``."""
    child = board.copy()
    apply_move(child, move)
    return child


def select_move(board: Board, strategy: Union[str, Strategy], side: TileValue,
                config: Optional[SearchConfig] = None,
                rng: Optional[np.random.Generator] = None) -> Optional[Coordinate]:
    """
    AI entry point: choose a move for ``side`` using ``strategy``.

    Returns:
        (col, row) of the chosen move, or None if there is no legal move
    """
    return OthelloBot(strategy, side, config, rng).select_move(board)
