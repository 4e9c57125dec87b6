"""
AI module.
Position evaluation, move search and the opening book.
"""

from .evaluator import (POSITION_WEIGHTS, disc_differential, evaluate_position,
                        mobility_value, positional_value)
from .opening_book import (OPENING_BOOK, get_opening_name, lookup_opening_book,
                           move_to_notation, notation_to_move)
from .search import OthelloBot, SearchStats, Strategy, select_move

__all__ = [
    'POSITION_WEIGHTS', 'disc_differential', 'evaluate_position', 'mobility_value',
    'positional_value', 'OPENING_BOOK', 'get_opening_name', 'lookup_opening_book',
    'move_to_notation', 'notation_to_move', 'OthelloBot', 'SearchStats', 'Strategy',
    'select_move',
]
