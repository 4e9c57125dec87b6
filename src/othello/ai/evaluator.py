"""
Static evaluation of Othello positions.

All scores are signed from a fixed perspective player: positive values favour
that player.
"""
import numpy as np

from ..game.board import Board, TileValue, opponent
from ..game.moves import get_valid_moves

# Strategic value of each square. Corners can never be flipped; the squares
# next to an empty corner tend to give it away.
POSITION_WEIGHTS = np.array([
    [100, -20, 10, 5, 5, 10, -20, 100],
    [-20, -50, -2, -2, -2, -2, -50, -20],
    [10, -2, -1, -1, -1, -1, -2, 10],
    [5, -2, -1, -1, -1, -1, -2, 5],
    [5, -2, -1, -1, -1, -1, -2, 5],
    [10, -2, -1, -1, -1, -1, -2, 10],
    [-20, -50, -2, -2, -2, -2, -50, -20],
    [100, -20, 10, 5, 5, 10, -20, 100],
], dtype=np.int32)

MOBILITY_WEIGHT = 5


def disc_differential(board: Board, player: TileValue) -> int:
    """Own disc count minus the opponent's."""
    return board.count(player) - board.count(opponent(player))


def positional_value(board: Board, player: TileValue) -> int:
    """Sum of square weights held by ``player`` minus those held by the opponent."""
    own = board.tiles == player
    other = board.tiles == opponent(player)
    return int(POSITION_WEIGHTS[own].sum() - POSITION_WEIGHTS[other].sum())


def mobility_value(board: Board, player: TileValue, weight: int = MOBILITY_WEIGHT) -> int:
    """
    Weighted difference in legal move counts between ``player`` and the opponent.

    The side to move is counted directly; the other side is counted by
    swapping ``player_turn`` on the board and restoring it afterwards.
    """
    to_move = len(get_valid_moves(board))

    original_player = board.player_turn
    board.player_turn = opponent(original_player)
    try:
        waiting = len(get_valid_moves(board))
    finally:
        board.player_turn = original_player

    if original_player == player:
        return (to_move - waiting) * weight
    return (waiting - to_move) * weight


def evaluate_position(board: Board, player: TileValue,
                      mobility_weight: int = MOBILITY_WEIGHT) -> int:
    """
    Full heuristic used at minimax leaves.

    Args:
        board: Position to score
        player: Perspective player
        mobility_weight: Points per move of mobility advantage

    Returns:
        Positional value + mobility value + disc differential
    """
    return (positional_value(board, player)
            + mobility_value(board, player, mobility_weight)
            + disc_differential(board, player))
