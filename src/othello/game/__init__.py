"""
Othello game module.
This package contains the board model, rule engine and game flow.
"""

from .board import (Board, Coordinate, InvalidBoard, InvalidMove, OthelloError, Score,
                    TileValue, create_board, opponent, score, starting_tiles)
from .rules import (apply_move, find_flips, flippable_directions, get_winner,
                    is_game_over, is_legal_move, pass_turn)
from .moves import get_annotated_board, get_valid_moves, has_adjacent_piece
from .game import GameEvent, GameState, MoveRecord, ReversiGame

__all__ = [
    'Board', 'Coordinate', 'InvalidBoard', 'InvalidMove', 'OthelloError', 'Score',
    'TileValue', 'create_board', 'opponent', 'score', 'starting_tiles',
    'apply_move', 'find_flips', 'flippable_directions', 'get_winner',
    'is_game_over', 'is_legal_move', 'pass_turn',
    'get_annotated_board', 'get_valid_moves', 'has_adjacent_piece',
    'GameEvent', 'GameState', 'MoveRecord', 'ReversiGame',
]
