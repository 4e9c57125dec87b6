"""
Rule engine for Othello.
Handles directional capture, move legality, move application and game end.
"""
from typing import List, Optional

from .board import Board, Coordinate, InvalidMove, TileValue, opponent, score


# Unit (col, row) steps, clockwise from north
DIRECTIONS = {
    'N': (0, -1),
    'NE': (1, -1),
    'E': (1, 0),
    'SE': (1, 1),
    'S': (0, 1),
    'SW': (-1, 1),
    'W': (-1, 0),
    'NW': (-1, -1),
}


def _capturing_run(board: Board, coord: Coordinate, player: TileValue,
                   step: Coordinate) -> List[Coordinate]:
    """Opponent tiles captured in one direction, or an empty list."""
    other = opponent(player)
    dx, dy = step
    col, row = coord[0] + dx, coord[1] + dy
    run = []
    while board.in_bounds((col, row)):
        value = board.tiles[row, col]
        if value == other:
            run.append((col, row))
        elif value == player:
            return run
        else:
            break
        col += dx
        row += dy
    # Ran off the edge or hit an empty tile
    return []


def flippable_directions(board: Board, coord: Coordinate,
                         player: Optional[TileValue] = None) -> List[str]:
    """Names of the directions in which placing at ``coord`` captures a run."""
    if player is None:
        player = board.player_turn
    return [name for name, step in DIRECTIONS.items()
            if _capturing_run(board, coord, player, step)]


def find_flips(board: Board, coord: Coordinate,
               player: Optional[TileValue] = None) -> List[Coordinate]:
    """
    Get every tile that placing a piece at ``coord`` would flip.

    Args:
        board: Board to scan (not modified)
        coord: (col, row) of the placement
        player: Side placing the piece. If None, uses the side to move.

    Returns:
        Flipped coordinates, grouped by direction in clockwise order from north
    """
    if player is None:
        player = board.player_turn
    flips = []
    for step in DIRECTIONS.values():
        flips.extend(_capturing_run(board, coord, player, step))
    return flips


def is_legal_move(board: Board, coord: Coordinate) -> bool:
    """Check if the side to move may place a piece at ``coord``."""
    if not board.in_bounds(coord):
        return False
    col, row = coord
    if board.tiles[row, col] != TileValue.EMPTY:
        return False
    return any(_capturing_run(board, coord, board.player_turn, step)
               for step in DIRECTIONS.values())


def apply_move(board: Board, coord: Coordinate) -> List[Coordinate]:
    """
    Place a piece for the side to move and flip every captured run.

    All checks run before the board is touched, so a rejected move leaves
    the board exactly as it was.

    Args:
        board: Board to mutate
        coord: (col, row) of the placement

    Returns:
        The coordinates that were flipped

    Raises:
        InvalidMove: If the target is off the board, occupied, or captures nothing
    """
    if not board.in_bounds(coord):
        raise InvalidMove(f"Coordinate {coord} is off the board.", coord)

    col, row = coord
    if board.tiles[row, col] != TileValue.EMPTY:
        raise InvalidMove("You cannot place a piece on an occupied square.", coord)

    player = board.player_turn
    flips = find_flips(board, coord, player)
    if not flips:
        raise InvalidMove("This move does not flip any opponent pieces.", coord)

    board.tiles[row, col] = player
    for fx, fy in flips:
        board.tiles[fy, fx] = player
    board.player_turn = opponent(player)
    return flips


def has_any_valid_move(board: Board) -> bool:
    """Check if the side to move has at least one legal move."""
    size = board.size
    for row in range(size):
        for col in range(size):
            if is_legal_move(board, (col, row)):
                return True
    return False


def pass_turn(board: Board) -> None:
    """
    Hand the turn to the opponent without placing a piece.

    Raises:
        InvalidMove: If the side to move still has a legal move
    """
    if has_any_valid_move(board):
        raise InvalidMove("Cannot pass when there are valid moves.")
    board.player_turn = opponent(board.player_turn)


def is_game_over(board: Board) -> bool:
    """
    Check if the game is over.

    The game ends when the grid is full or neither side can move. The
    opponent's moves are checked by swapping ``player_turn``, which is always
    restored before returning.
    """
    if not (board.tiles == TileValue.EMPTY).any():
        return True

    if has_any_valid_move(board):
        return False

    original_player = board.player_turn
    board.player_turn = opponent(original_player)
    try:
        other_has_moves = has_any_valid_move(board)
    finally:
        board.player_turn = original_player

    return not other_has_moves


def get_winner(board: Board) -> Optional[TileValue]:
    """Get the side with more pieces, or None for a draw."""
    black, white = score(board)
    if black > white:
        return TileValue.BLACK
    elif white > black:
        return TileValue.WHITE
    return None
