"""
The Game class will be the entrypoint into the domain layer for the service layer.
It holds the authoritative game state and is responsible for applying a move once the rules allow it -->
passes this information to the service layer, which can then pass it onwards to the transport layer.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Self

from src.chess.board import Board
from src.chess.moves import Move, TerminalState, detect_terminal_state, is_legal_move
from src.chess.pieces import Color, Piece, PieceType
from src.core.exceptions import GameOverError, IllegalMoveError, NotYourTurnError
from src.core.models import GameModel, MoveRecordModel
from src.core.shared_types import Winner

PLAYING_COLORS: tuple[Color, Color] = (Color.WHITE, Color.BLACK)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def color_name(color: Color) -> str:
    return color.name.lower()


@dataclass(frozen=True)
class MoveRecord:
    """Snapshot of an accepted move, taken before the board gets updated. Never changed afterwards."""

    move: Move
    piece: Piece
    captured_piece: Piece
    player: Color
    timestamp: datetime = field(default_factory=utc_now)

    @property
    def is_capture(self) -> bool:
        return not self.captured_piece.is_empty()

    def to_model(self) -> MoveRecordModel:
        return MoveRecordModel(
            from_square=(self.move.from_square.row, self.move.from_square.col),
            to_square=(self.move.to_square.row, self.move.to_square.col),
            piece=self.piece.to_code(),
            captured_piece=self.captured_piece.to_code(),
            player=color_name(self.player),
            timestamp=self.timestamp,
        )


def _no_captures() -> dict[Color, list[PieceType]]:
    return {color: [] for color in PLAYING_COLORS}


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    current_turn: Color = Color.WHITE
    game_over: bool = False
    winner: Optional[Winner] = None
    move_history: list[MoveRecord] = field(default_factory=list)
    captured_pieces: dict[Color, list[PieceType]] = field(default_factory=_no_captures)

    @classmethod
    def new_game(cls) -> Self:
        """Standard starting position, White to move, nothing played yet."""
        return cls(board=Board.starting_position())

    def to_model(self) -> GameModel:
        """Encode into a format the Service layer uses"""
        return GameModel(
            board=self.board.to_grid(),
            current_turn=color_name(self.current_turn),
            game_over=self.game_over,
            winner=self.winner.value if self.winner else None,
            move_history=[record.to_model() for record in self.move_history],
            # captured pieces keep their own color in the encoding (White's list holds lower case letters)
            captured_pieces={
                color_name(color): [
                    Piece(piece_type, color.opponent).to_code()
                    for piece_type in self.captured_pieces[color]
                ]
                for color in PLAYING_COLORS
            },
        )

    def make_move(
        self, color: Color, move: Move, allow_after_game_over: bool = False
    ) -> MoveRecord:
        """
        Attempt to make a move
        -----

        1. make sure the game is (still) in progress
        2. make sure it is your turn
        3. make sure the rules allow the move
        (nothing has changed up to this point, so a rejected move leaves the game untouched)
        4. take a snapshot of the move, book the capture
        5. update the board
        6. update the history of moves
        7. check for the end of the game, otherwise pass the turn
        """
        if self.game_over and not allow_after_game_over:
            raise GameOverError(
                f"Game is over. Winner: {self.winner.value if self.winner else None}"
            )

        self._assert_your_turn(color)

        if not is_legal_move(self.board, self.current_turn, move):
            raise IllegalMoveError(f"Move not allowed: {move}")

        record = self._create_move_record(move)

        if record.is_capture:
            self._update_captured_pieces(record)

        self.board.move_piece(move)

        self._update_move_history(record)

        self._update_game_status()

        return record

    # -- PRIVATE HELPERS ---
    def _assert_your_turn(self, color: Color) -> None:
        """You must wait for your turn before making a move."""
        if color != self.current_turn:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {color_name(self.current_turn)} to make a move first."
            )

    def _create_move_record(self, move: Move) -> MoveRecord:
        """Snapshot of the moving pieces before the updates are done."""
        return MoveRecord(
            move=move,
            piece=self.board.piece(move.from_square),
            captured_piece=self.board.piece(move.to_square),
            player=self.current_turn,
        )

    def _update_captured_pieces(self, record: MoveRecord) -> None:
        self.captured_pieces[record.player].append(record.captured_piece.type)

    def _update_move_history(self, record: MoveRecord) -> None:
        self.move_history.append(record)

    def _update_game_status(self) -> None:
        """Performs checks to see if game has ended. The turn only passes on if it did not.

        NOTE the turn has not been passed on yet. At this point the turn player is the player that just moved.
        """
        terminal_state = self._detect_terminal_state()
        if terminal_state.is_terminal:
            self.game_over = True
            self.winner = terminal_state.winner
        else:
            self.current_turn = self.current_turn.opponent

    def _detect_terminal_state(self) -> TerminalState:
        return detect_terminal_state(self.board, self.current_turn)
