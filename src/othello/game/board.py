"""
Board module for Othello.
Holds the 8x8 grid, tile values and whose turn it is.
"""
from enum import IntEnum
from typing import Dict, Any, List, NamedTuple, Optional, Sequence, Tuple
import numpy as np

Coordinate = Tuple[int, int]  # (col, row)


class TileValue(IntEnum):
    """Values a board cell can hold."""
    EMPTY = 0
    BLACK = 1
    WHITE = 2
    POSSIBLE_MOVE = 3  # Display-only marker, never part of a canonical board


# Single-letter symbols used in the JSON state blob
SYMBOLS = {
    TileValue.BLACK: 'B',
    TileValue.WHITE: 'W',
    TileValue.EMPTY: 'E',
    TileValue.POSSIBLE_MOVE: 'P',
}
FROM_SYMBOL = {symbol: value for value, symbol in SYMBOLS.items()}

CANONICAL_VALUES = (TileValue.EMPTY, TileValue.BLACK, TileValue.WHITE)


class OthelloError(Exception):
    """Base class for errors raised by the engine."""


class InvalidMove(OthelloError):
    """Raised when a move is rejected. The board is left unchanged."""

    def __init__(self, message: str, coordinate: Optional[Coordinate] = None):
        super().__init__(message)
        self.coordinate = coordinate


class InvalidBoard(OthelloError, ValueError):
    """Raised for a malformed grid or state blob."""


class Score(NamedTuple):
    black: int
    white: int


def opponent(player: TileValue) -> TileValue:
    return TileValue.WHITE if player == TileValue.BLACK else TileValue.BLACK


class Board:
    """
    An Othello board: a square grid of tile values plus the side to move.

    The grid is stored row-major as a numpy array, so a (col, row)
    coordinate maps to ``tiles[row, col]``.
    """

    SIZE = 8

    def __init__(self, tiles: np.ndarray, player_turn: TileValue = TileValue.BLACK):
        self.tiles = tiles
        self.player_turn = TileValue(player_turn)

    @property
    def size(self) -> int:
        return self.tiles.shape[0]

    def copy(self) -> 'Board':
        """Create a deep copy of the board."""
        return Board(self.tiles.copy(), self.player_turn)

    def tile(self, coord: Coordinate) -> TileValue:
        col, row = coord
        return TileValue(self.tiles[row, col])

    def in_bounds(self, coord: Coordinate) -> bool:
        col, row = coord
        return 0 <= col < self.size and 0 <= row < self.size

    def count(self, value: TileValue) -> int:
        return int(np.count_nonzero(self.tiles == value))

    def to_dict(self) -> Dict[str, Any]:
        """Convert the board to a JSON-friendly dictionary."""
        return {
            'tiles': [[SYMBOLS[TileValue(v)] for v in row] for row in self.tiles.tolist()],
            'playerTurn': SYMBOLS[self.player_turn],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Board':
        """Create a board from a dictionary produced by ``to_dict``."""
        try:
            rows = [[FROM_SYMBOL[symbol] for symbol in row] for row in data['tiles']]
            player_turn = FROM_SYMBOL[data['playerTurn']]
        except (KeyError, TypeError) as e:
            raise InvalidBoard(f"Malformed board data: {e!r}") from e
        if player_turn not in (TileValue.BLACK, TileValue.WHITE):
            raise InvalidBoard(f"Invalid player turn: {data['playerTurn']!r}")
        return create_board(rows, player_turn)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.player_turn == other.player_turn
                and np.array_equal(self.tiles, other.tiles))

    def __repr__(self) -> str:
        return f"Board(size={self.size}, player_turn={self.player_turn.name})"

    def __str__(self) -> str:
        """Return a string representation of the board."""
        symbols = {
            TileValue.EMPTY: '.',
            TileValue.BLACK: 'B',
            TileValue.WHITE: 'W',
            TileValue.POSSIBLE_MOVE: '*',
        }
        rows = []
        for row in self.tiles.tolist():
            rows.append(' '.join(symbols[TileValue(v)] for v in row))
        black, white = score(self)
        rows.append(f"Current player: {self.player_turn.name.capitalize()}")
        rows.append(f"Score - Black: {black}, White: {white}")
        return "\n".join(rows)


def starting_tiles(size: int = Board.SIZE) -> List[List[TileValue]]:
    """Standard opening layout: the four centre squares alternate colours."""
    E, B, W = TileValue.EMPTY, TileValue.BLACK, TileValue.WHITE
    tiles = [[E] * size for _ in range(size)]
    mid = size // 2
    tiles[mid - 1][mid - 1] = W
    tiles[mid - 1][mid] = B
    tiles[mid][mid - 1] = B
    tiles[mid][mid] = W
    return tiles


def create_board(initial_tiles: Optional[Sequence[Sequence[int]]] = None,
                 player_turn: TileValue = TileValue.BLACK) -> Board:
    """
    Construct a canonical board.

    Args:
        initial_tiles: Square grid of tile values, row-major. Defaults to the
            standard starting layout.
        player_turn: Side to move first

    Returns:
        A new Board that owns its own copy of the grid

    Raises:
        InvalidBoard: If the grid is not square or holds anything other than
            Black, White or Empty
    """
    if initial_tiles is None:
        initial_tiles = starting_tiles()

    try:
        tiles = np.array(initial_tiles, dtype=np.int8)
    except (ValueError, TypeError, OverflowError) as e:
        raise InvalidBoard(f"Board grid is malformed: {e}") from e
    if tiles.ndim != 2 or tiles.shape[0] != tiles.shape[1] or tiles.shape[0] == 0:
        raise InvalidBoard(f"Board must be a non-empty square grid, got shape {tiles.shape}")
    if not np.isin(tiles, CANONICAL_VALUES).all():
        raise InvalidBoard("Board may only contain Black, White or Empty tiles")
    if player_turn not in (TileValue.BLACK, TileValue.WHITE):
        raise InvalidBoard(f"Invalid player turn: {player_turn!r}")

    return Board(tiles, player_turn)


def score(board: Board) -> Score:
    """Get the current piece counts (black, white)."""
    return Score(board.count(TileValue.BLACK), board.count(TileValue.WHITE))
