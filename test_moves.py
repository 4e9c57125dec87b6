"""
Tests for move enumeration and the annotated display board.
"""
import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.append(str(Path(__file__).parent.absolute() / "src"))

from othello.game.board import InvalidBoard, TileValue, create_board
from othello.game.moves import get_annotated_board, get_valid_moves, has_adjacent_piece
from othello.game.rules import apply_move, is_legal_move

E, B, W, P = TileValue.EMPTY, TileValue.BLACK, TileValue.WHITE, TileValue.POSSIBLE_MOVE


def test_has_adjacent_piece():
    board = create_board()
    assert has_adjacent_piece(board, (2, 2))
    assert has_adjacent_piece(board, (5, 5))
    assert not has_adjacent_piece(board, (1, 1))
    assert not has_adjacent_piece(board, (0, 0))


def test_valid_moves_are_row_major():
    board = create_board()
    apply_move(board, (2, 3))
    moves = get_valid_moves(board)

    assert moves == sorted(moves, key=lambda m: (m[1], m[0]))
    assert moves == [(2, 2), (4, 2), (2, 4)]


def test_valid_moves_match_exhaustive_scan():
    board = create_board()
    for move in [(3, 2), (2, 2), (2, 3), (4, 2)]:
        apply_move(board, move)

    expected = [(col, row) for row in range(8) for col in range(8)
                if is_legal_move(board, (col, row))]
    assert get_valid_moves(board) == expected


def test_valid_moves_do_not_mutate():
    board = create_board()
    before = board.copy()
    get_valid_moves(board)
    assert board == before


def test_annotated_board():
    board = create_board()
    before = board.copy()
    annotated = get_annotated_board(board)

    assert board == before, "Annotating must not touch the source board"
    marked = sorted(map(tuple, np.argwhere(annotated.tiles == P)[:, ::-1].tolist()))
    assert marked == sorted(get_valid_moves(board))
    assert annotated.tile((3, 3)) == W
    assert annotated.tile((4, 3)) == B
    assert annotated.count(E) == 56


def test_annotated_board_is_not_canonical():
    annotated = get_annotated_board(create_board())
    with pytest.raises(InvalidBoard):
        create_board(annotated.tiles)
