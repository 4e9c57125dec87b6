"""
Move enumeration for Othello.
"""
from typing import List

import numpy as np

from .board import Board, Coordinate, TileValue
from .rules import is_legal_move


def has_adjacent_piece(board: Board, coord: Coordinate) -> bool:
    """Check if any cell in the 3x3 neighbourhood of ``coord`` is occupied."""
    col, row = coord
    size = board.size
    for y in range(max(row - 1, 0), min(row + 2, size)):
        for x in range(max(col - 1, 0), min(col + 2, size)):
            if (x, y) == (col, row):
                continue
            if board.tiles[y, x] != TileValue.EMPTY:
                return True
    return False


def get_valid_moves(board: Board) -> List[Coordinate]:
    """
    Get all legal moves for the side to move.

    Cells are scanned row by row, left to right, and callers rely on this
    order. Empty cells with no occupied neighbour cannot capture and are
    skipped.

    Returns:
        List of (col, row) tuples in row-major order
    """
    valid_moves = []
    size = board.size
    for row in range(size):
        for col in range(size):
            if board.tiles[row, col] != TileValue.EMPTY:
                continue
            if not has_adjacent_piece(board, (col, row)):
                continue
            if is_legal_move(board, (col, row)):
                valid_moves.append((col, row))
    return valid_moves


def get_annotated_board(board: Board) -> Board:
    """
    Get a display copy of the board with legal moves marked.

    Every empty cell the side to move could play is set to
    ``TileValue.POSSIBLE_MOVE``. The result is for presentation only; it is
    not a canonical board and must not be passed back to the rule engine.
    """
    annotated = board.copy()
    valid_moves = get_valid_moves(board)
    if valid_moves:
        cols, rows = zip(*valid_moves)
        annotated.tiles[np.array(rows), np.array(cols)] = TileValue.POSSIBLE_MOVE
    return annotated
