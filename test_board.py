"""
Tests for the board model.
"""
import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.append(str(Path(__file__).parent.absolute() / "src"))

from othello.game.board import (Board, InvalidBoard, Score, TileValue, create_board,
                                opponent, score, starting_tiles)

E, B, W, P = TileValue.EMPTY, TileValue.BLACK, TileValue.WHITE, TileValue.POSSIBLE_MOVE


def test_initial_board():
    """Test the initial board setup."""
    board = create_board()

    assert board.size == 8, "Board should be 8x8"
    assert board.player_turn == B, "Black moves first"

    assert board.tile((3, 3)) == W
    assert board.tile((4, 4)) == W
    assert board.tile((4, 3)) == B
    assert board.tile((3, 4)) == B

    assert board.count(E) == 60, "Should have 60 empty squares initially"
    assert score(board) == Score(black=2, white=2)


def test_coordinates_are_col_row():
    tiles = starting_tiles()
    tiles[0][5] = B  # row 0, column 5
    board = create_board(tiles)
    assert board.tile((5, 0)) == B
    assert board.tile((0, 5)) == E


def test_copy_does_not_alias():
    board = create_board()
    clone = board.copy()
    assert clone == board

    clone.tiles[0, 0] = B
    clone.player_turn = W
    assert board.tiles[0, 0] == E
    assert board.player_turn == B
    assert clone != board


def test_create_board_copies_input():
    tiles = np.array(starting_tiles(), dtype=np.int8)
    board = create_board(tiles)
    tiles[0, 0] = W
    assert board.tiles[0, 0] == E


def test_create_board_rejects_marker():
    tiles = starting_tiles()
    tiles[2][3] = P
    with pytest.raises(InvalidBoard):
        create_board(tiles)


def test_create_board_rejects_bad_shape():
    with pytest.raises(InvalidBoard):
        create_board([[E, E, E], [E, E, E]])
    with pytest.raises(InvalidBoard):
        create_board([[E, 7], [E, E]])


def test_create_board_rejects_ragged_or_non_numeric_grid():
    with pytest.raises(InvalidBoard):
        create_board([[E, E], [E]])
    with pytest.raises(InvalidBoard):
        create_board([['x']])


def test_in_bounds():
    board = create_board()
    assert board.in_bounds((0, 0))
    assert board.in_bounds((7, 7))
    assert not board.in_bounds((8, 0))
    assert not board.in_bounds((0, -1))


def test_opponent():
    assert opponent(B) == W
    assert opponent(W) == B


def test_dict_round_trip():
    board = create_board()
    board.player_turn = W
    data = board.to_dict()

    assert data['playerTurn'] == 'W'
    assert data['tiles'][3][3] == 'W'
    assert data['tiles'][3][4] == 'B'
    assert data['tiles'][0][0] == 'E'
    assert Board.from_dict(data) == board


def test_from_dict_rejects_garbage():
    with pytest.raises(InvalidBoard):
        Board.from_dict({'tiles': [['X']], 'playerTurn': 'B'})
    with pytest.raises(InvalidBoard):
        Board.from_dict({'tiles': [['E']], 'playerTurn': 'E'})
    with pytest.raises(InvalidBoard):
        Board.from_dict({'playerTurn': 'B'})


def test_str():
    text = str(create_board())
    lines = text.splitlines()
    assert lines[3] == ". . . W B . . ."
    assert lines[4] == ". . . B W . . ."
    assert "Current player: Black" in text
    assert "Score - Black: 2, White: 2" in text
