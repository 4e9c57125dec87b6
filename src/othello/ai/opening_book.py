"""
Opening book for Othello.

Keys are comma-joined move sequences in algebraic notation: the column is a
letter ``a``-``h`` and the rank is ``row + 1``, so the top-left square is
``a1`` and Black's four first moves are ``d3``, ``c4``, ``f5`` and ``e6``.
"""
from typing import Dict, NamedTuple, Optional, Sequence, Union

from ..game.board import Coordinate
from ..game.game import MoveRecord


class BookEntry(NamedTuple):
    best_move: Coordinate
    name: str


def move_to_notation(move: Coordinate) -> str:
    """Convert a (col, row) coordinate to algebraic notation."""
    col, row = move
    return f"{chr(ord('a') + col)}{row + 1}"


def notation_to_move(notation: str, size: int = 8) -> Coordinate:
    """
    Convert algebraic notation to a (col, row) coordinate.

    Raises:
        ValueError: If the text is not a square on the board
    """
    text = notation.strip().lower()
    if len(text) < 2 or not text[1:].isdigit():
        raise ValueError(f"Invalid move notation: {notation!r}")
    col = ord(text[0]) - ord('a')
    row = int(text[1:]) - 1
    if not (0 <= col < size and 0 <= row < size):
        raise ValueError(f"Move {notation!r} is off the board")
    return col, row


_LINES = [
    # (sequence, reply, name)
    ('', 'd3', 'Diagonal Opening (d3)'),

    ('d3', 'c3', 'Tiger'),
    ('d3,c3', 'c4', 'Tiger'),
    ('d3,c3,c4', 'c5', 'Tiger Line'),
    ('d3,c3,c4,c5', 'b3', 'Tiger Extension'),

    ('c4', 'e3', 'Parallel'),
    ('c4,e3', 'f4', 'Parallel Line'),
    ('c4,e3,f4', 'c3', 'Parallel Response'),

    ('f5', 'd6', 'Perpendicular'),
    ('f5,d6', 'c3', 'Perpendicular Line'),

    ('d3,c5', 'f6', 'Rabbit'),
    ('d3,c5,f6', 'e6', 'Rabbit Line'),
    ('d3,c5,d6', 'f5', 'Cow'),
    ('d3,c3,c4,e3', 'd2', 'Snake'),
    ('c4,c5', 'e3', 'Rose'),
    ('c4,c5,e3', 'e6', 'Rose Line'),
    ('c4,c3', 'd3', 'Heath'),
    ('c4,c3,d3', 'c5', 'Heath Line'),
    ('d3,e3', 'f5', 'Shaman/Chimney'),
    ('d3,e3,f5', 'f6', 'Shaman Line'),
]

OPENING_BOOK: Dict[str, BookEntry] = {
    sequence: BookEntry(notation_to_move(reply), name)
    for sequence, reply, name in _LINES
}

HistoryItem = Union[Coordinate, MoveRecord]


def build_sequence_key(moves: Sequence[HistoryItem]) -> Optional[str]:
    """Build the book key for a move history. Returns None if it contains a pass."""
    parts = []
    for move in moves:
        coord = move.coordinate if isinstance(move, MoveRecord) else move
        if coord is None:
            return None
        parts.append(move_to_notation(coord))
    return ','.join(parts)


def lookup_opening_book(moves: Sequence[HistoryItem]) -> Optional[Coordinate]:
    """Look up the book reply to a move history, or None if it is out of book."""
    entry = OPENING_BOOK.get(build_sequence_key(moves))
    return entry.best_move if entry else None


def get_opening_name(moves: Sequence[HistoryItem]) -> Optional[str]:
    entry = OPENING_BOOK.get(build_sequence_key(moves))
    return entry.name if entry else None
