"""
Othello game module.
Handles game flow, move history, undo/redo and state export.
"""
import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from .board import (Board, Coordinate, InvalidBoard, InvalidMove, Score, TileValue,
                    FROM_SYMBOL, SYMBOLS, create_board, score)
from .moves import get_annotated_board, get_valid_moves
from .rules import apply_move, get_winner, is_game_over, pass_turn

logger = logging.getLogger(__name__)

EVENT_TYPES = ('move', 'game_over', 'invalid_move', 'state_change')


@dataclass(frozen=True)
class MoveRecord:
    """A single move in the game. A pass has no coordinate."""
    player: TileValue
    coordinate: Optional[Coordinate]
    score_after: Score
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'player': SYMBOLS[self.player],
            'coordinate': list(self.coordinate) if self.coordinate is not None else None,
            'scoreAfter': {'black': self.score_after.black, 'white': self.score_after.white},
            'timestamp': self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MoveRecord':
        coordinate = data.get('coordinate')
        return cls(
            player=FROM_SYMBOL[data['player']],
            coordinate=tuple(coordinate) if coordinate is not None else None,
            score_after=Score(data['scoreAfter']['black'], data['scoreAfter']['white']),
            timestamp=data.get('timestamp', 0.0),
        )


@dataclass
class GameEvent:
    type: str
    data: Dict[str, Any]


@dataclass
class GameState:
    """Snapshot of a game, safe to hand to a UI layer."""
    board: Board
    score: Score
    valid_moves: List[Coordinate]
    is_game_over: bool
    winner: Optional[TileValue]
    move_history: List[MoveRecord]
    current_player: TileValue
    black_player_id: Optional[str] = None
    white_player_id: Optional[str] = None


EventListener = Callable[[GameEvent], None]


class ReversiGame:
    """
    Main game class that owns the live board and manages the game flow.

    The board itself is only changed through the rule engine; this class adds
    history, undo/redo, event listeners and JSON export on top.
    """

    def __init__(self, black_player_id: Optional[str] = None,
                 white_player_id: Optional[str] = None,
                 initial_tiles: Optional[Sequence[Sequence[int]]] = None):
        """
        Initialize a new game.

        Args:
            black_player_id: Optional ID for the black player
            white_player_id: Optional ID for the white player
            initial_tiles: Optional starting grid (defaults to the standard layout)
        """
        self.black_player_id = black_player_id
        self.white_player_id = white_player_id
        self._initial_board = create_board(initial_tiles)
        self.board = self._initial_board.copy()
        self.move_history: List[MoveRecord] = []
        self._redo_stack: List[MoveRecord] = []
        self._listeners: Dict[str, List[EventListener]] = {}

    # Events

    def on(self, event_type: str, listener: EventListener) -> None:
        """Subscribe to game events."""
        if event_type not in EVENT_TYPES:
            raise ValueError(f"Unknown event type: {event_type}")
        self._listeners.setdefault(event_type, []).append(listener)

    def off(self, event_type: str, listener: EventListener) -> None:
        """Unsubscribe from game events."""
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def _emit(self, event_type: str, data: Dict[str, Any]) -> None:
        for listener in list(self._listeners.get(event_type, [])):
            listener(GameEvent(event_type, data))

    # Moves

    def make_move(self, coord: Coordinate) -> bool:
        """
        Make a move for the side to move.

        Args:
            coord: (col, row) of the placement

        Returns:
            bool: True if the move was valid and made, False otherwise
        """
        player = self.board.player_turn
        try:
            apply_move(self.board, coord)
        except InvalidMove as e:
            logger.debug("Rejected move %s for %s: %s", coord, player.name, e)
            self._emit('invalid_move', {'coordinate': coord, 'error': str(e)})
            return False

        self._record(MoveRecord(player, tuple(coord), score(self.board)))
        return True

    def pass_turn(self) -> bool:
        """Pass when the side to move has no legal move."""
        player = self.board.player_turn
        try:
            pass_turn(self.board)
        except InvalidMove as e:
            self._emit('invalid_move', {'coordinate': None, 'error': str(e)})
            return False

        self._record(MoveRecord(player, None, score(self.board)))
        return True

    def _record(self, move: MoveRecord) -> None:
        self.move_history.append(move)
        self._redo_stack.clear()

        state = self.get_state()
        self._emit('move', {'move': move, 'state': state})
        self._emit('state_change', {'state': state})

        if state.is_game_over:
            black, white = state.score
            logger.info("Game over. Black: %d, White: %d", black, white)
            self._emit('game_over', {'winner': state.winner, 'state': state})

    # Undo / redo

    def can_undo(self) -> bool:
        return bool(self.move_history)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def undo(self) -> bool:
        """Take back the last move. Returns False if there is nothing to undo."""
        if not self.can_undo():
            return False
        board = self._replay(self.move_history[:-1])
        self._redo_stack.append(self.move_history.pop())
        self.board = board
        self._emit('state_change', {'state': self.get_state()})
        return True

    def redo(self) -> bool:
        """Replay the last undone move. Returns False if there is nothing to redo."""
        if not self.can_redo():
            return False
        board = self._replay(self.move_history + [self._redo_stack[-1]])
        self.move_history.append(self._redo_stack.pop())
        self.board = board
        self._emit('state_change', {'state': self.get_state()})
        return True

    def _replay(self, history: Sequence[MoveRecord],
                start: Optional[Board] = None) -> Board:
        board = (start if start is not None else self._initial_board).copy()
        for move in history:
            if move.coordinate is None:
                pass_turn(board)
            else:
                apply_move(board, move.coordinate)
        return board

    # Queries

    def get_state(self) -> GameState:
        """Get the current game state."""
        game_over = is_game_over(self.board)
        return GameState(
            board=self.board.copy(),
            score=score(self.board),
            valid_moves=get_valid_moves(self.board),
            is_game_over=game_over,
            winner=get_winner(self.board) if game_over else None,
            move_history=list(self.move_history),
            current_player=self.board.player_turn,
            black_player_id=self.black_player_id,
            white_player_id=self.white_player_id,
        )

    def get_valid_moves(self) -> List[Coordinate]:
        return get_valid_moves(self.board)

    def get_annotated_board(self) -> Board:
        """Get the board with legal moves marked, for display."""
        return get_annotated_board(self.board)

    def get_score(self) -> Score:
        return score(self.board)

    def get_current_player(self) -> TileValue:
        return self.board.player_turn

    def get_move_history(self) -> List[MoveRecord]:
        return list(self.move_history)

    def is_game_over(self) -> bool:
        return is_game_over(self.board)

    def get_winner(self) -> Optional[TileValue]:
        """Get the winner, or None if the game is drawn or not over."""
        return get_winner(self.board) if self.is_game_over() else None

    def get_player_id(self, color: TileValue) -> Optional[str]:
        return self.black_player_id if color == TileValue.BLACK else self.white_player_id

    def reset(self) -> None:
        """Reset the game to its initial state."""
        self.board = self._initial_board.copy()
        self.move_history = []
        self._redo_stack = []
        self._emit('state_change', {'state': self.get_state()})

    # Persistence

    def export_state(self) -> str:
        """Export the game as a JSON string."""
        return json.dumps({
            'initialBoard': self._initial_board.to_dict(),
            'board': self.board.to_dict(),
            'moveHistory': [move.to_dict() for move in self.move_history],
            'blackPlayerId': self.black_player_id,
            'whitePlayerId': self.white_player_id,
        })

    def import_state(self, state_json: str) -> None:
        """
        Load a game saved with ``export_state``.

        Raises:
            InvalidBoard: If the blob is not valid JSON, is missing fields, or
                its move history does not lead from the initial board to the
                saved board
        """
        try:
            state = json.loads(state_json)
            board = Board.from_dict(state['board'])
            if 'initialBoard' in state:
                initial = Board.from_dict(state['initialBoard'])
            else:
                initial = create_board()
            history = [MoveRecord.from_dict(m) for m in state.get('moveHistory', [])]
        except InvalidBoard:
            raise
        except (ValueError, KeyError, TypeError) as e:
            raise InvalidBoard(f"Malformed game state: {e!r}") from e

        try:
            replayed = self._replay(history, initial)
        except InvalidMove as e:
            raise InvalidBoard(f"Move history cannot be replayed: {e}") from e
        if replayed != board:
            raise InvalidBoard("Move history does not reproduce the saved board")

        self._initial_board = initial
        self.board = board
        self.move_history = history
        self._redo_stack = []
        self.black_player_id = state.get('blackPlayerId')
        self.white_player_id = state.get('whitePlayerId')
        self._emit('state_change', {'state': self.get_state()})

    def copy(self) -> 'ReversiGame':
        """Create a deep copy of the game without its listeners."""
        new_game = ReversiGame(self.black_player_id, self.white_player_id)
        new_game._initial_board = self._initial_board.copy()
        new_game.board = self.board.copy()
        new_game.move_history = list(self.move_history)
        new_game._redo_stack = list(self._redo_stack)
        return new_game

    def __str__(self) -> str:
        result = str(self.board)
        if self.is_game_over():
            winner = self.get_winner()
            if winner is None:
                result += "\nGame over! It's a draw!"
            else:
                result += f"\nGame over! {winner.name.capitalize()} wins!"
        return result
