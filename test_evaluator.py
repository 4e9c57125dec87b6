"""
Tests for the static position evaluator.
"""
import sys
from pathlib import Path

import numpy as np

sys.path.append(str(Path(__file__).parent.absolute() / "src"))

from othello.ai.evaluator import (POSITION_WEIGHTS, disc_differential, evaluate_position,
                                  mobility_value, positional_value)
from othello.game.board import TileValue, create_board
from othello.game.rules import apply_move

E, B, W = TileValue.EMPTY, TileValue.BLACK, TileValue.WHITE


def corner_board(turn=B):
    tiles = [[E] * 8 for _ in range(8)]
    tiles[0][0] = W
    tiles[0][1] = B
    return create_board(tiles, turn)


def test_weight_table_shape():
    assert POSITION_WEIGHTS.shape == (8, 8)
    assert np.array_equal(POSITION_WEIGHTS, POSITION_WEIGHTS.T)
    assert np.array_equal(POSITION_WEIGHTS, np.flipud(POSITION_WEIGHTS))
    assert np.array_equal(POSITION_WEIGHTS, np.fliplr(POSITION_WEIGHTS))
    for corner in [(0, 0), (0, 7), (7, 0), (7, 7)]:
        assert POSITION_WEIGHTS[corner] == 100
    assert POSITION_WEIGHTS[1, 1] == -50
    assert POSITION_WEIGHTS[0, 1] == -20
    assert POSITION_WEIGHTS[0, 2] == 10
    assert POSITION_WEIGHTS[3, 3] == -1


def test_starting_position_is_balanced():
    board = create_board()
    assert disc_differential(board, B) == 0
    assert positional_value(board, B) == 0
    assert mobility_value(board, B) == 0
    assert evaluate_position(board, B) == 0


def test_disc_differential():
    board = create_board()
    apply_move(board, (2, 3))
    assert disc_differential(board, B) == 3
    assert disc_differential(board, W) == -3


def test_positional_value():
    board = corner_board()
    # White holds a corner, Black the square beside it
    assert positional_value(board, W) == 100 + 20
    assert positional_value(board, B) == -120


def test_mobility_orientation_ignores_turn():
    # Only White can move (one move), Black has none
    board = corner_board(turn=B)
    assert mobility_value(board, B) == -5
    assert mobility_value(board, W) == 5
    assert board.player_turn == B

    board = corner_board(turn=W)
    assert mobility_value(board, B) == -5
    assert mobility_value(board, W) == 5
    assert board.player_turn == W

    assert mobility_value(board, W, weight=2) == 2


def test_evaluate_position_sums_terms():
    board = create_board()
    for move in [(2, 3), (2, 2), (2, 1)]:
        apply_move(board, move)
    before = board.copy()

    for player in (B, W):
        expected = (positional_value(board, player)
                    + mobility_value(board, player)
                    + disc_differential(board, player))
        assert evaluate_position(board, player) == expected
    assert board == before


def test_evaluation_is_zero_sum():
    board = create_board()
    for move in [(2, 3), (2, 2), (2, 1), (4, 2)]:
        apply_move(board, move)
    assert evaluate_position(board, B) == -evaluate_position(board, W)
