"""
Othello engine: board model, rule engine and AI opponents.
"""

from .game import (Board, InvalidBoard, InvalidMove, OthelloError, ReversiGame, TileValue,
                   apply_move, create_board, get_annotated_board, get_valid_moves,
                   get_winner, is_game_over, is_legal_move, score)
from .ai import OthelloBot, Strategy, select_move

__version__ = "0.1"

__all__ = [
    'Board', 'InvalidBoard', 'InvalidMove', 'OthelloError', 'ReversiGame', 'TileValue',
    'apply_move', 'create_board', 'get_annotated_board', 'get_valid_moves',
    'get_winner', 'is_game_over', 'is_legal_move', 'score',
    'OthelloBot', 'Strategy', 'select_move',
]
