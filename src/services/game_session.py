"""
Orchestration of communication from the transport layer to the game logic (and the reverse direction).

One GameSession owns the one authoritative Game. The transport layer gets a handle to the session and
calls into it for every incoming message; whatever it returns can be broadcast as-is.
All public methods run under the same lock, so proposals coming in from different connections
are applied one at a time, in the order they get the lock.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Optional, Self

from pydantic import ValidationError

from src.api.models import (
    GAME_OVER_MESSAGE,
    ILLEGAL_MOVE_MESSAGE,
    MALFORMED_MOVE_MESSAGE,
    NOT_YOUR_TURN_MESSAGE,
    GameStateResponse,
    MoveRequest,
    MoveResult,
    PlayerAssignment,
)
from src.chess.game import Game
from src.chess.moves import Move
from src.chess.pieces import Color as PieceColor
from src.chess.square import Square
from src.core.config import Settings, configure_logging
from src.core.exceptions import (
    GameError,
    GameOverError,
    NotYourTurnError,
)
from src.core.shared_types import Color, RejectionReason

logger = logging.getLogger(__name__)

# Wire colors <-> domain colors
TO_PIECE_COLOR: dict[Color, PieceColor] = {
    Color.WHITE: PieceColor.WHITE,
    Color.BLACK: PieceColor.BLACK,
}


class GameSession:
    """Single game, two seats, any number of moves and resets."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or Settings()
        self.game = Game.new_game()
        self.players: dict[str, PlayerAssignment] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_env(cls) -> Self:
        """Build a session configured from environment variables (and set up logging accordingly)."""
        settings = Settings.from_env()
        configure_logging(settings.log_level)
        return cls(settings)

    # -- Game operations ---
    def propose_move(
        self, requester: Color, from_square: Square, to_square: Square
    ) -> MoveResult:
        """A player wants to move the piece on `from_square` to `to_square`."""
        with self._lock:
            return self._propose_move(requester, Move(from_square, to_square))

    def submit_move(self, player_id: str, payload: dict[str, Any]) -> MoveResult:
        """
        Raw move message from a connection.
        ----
        Players without a seat are never on turn. A payload that cannot be read is refused like an illegal move.
        """
        with self._lock:
            assignment = self.players.get(player_id)
            if assignment is None:
                logger.debug(f"Move from unknown player {player_id} refused")
                return MoveResult.reject(
                    RejectionReason.NOT_YOUR_TURN, NOT_YOUR_TURN_MESSAGE
                )

            try:
                request = MoveRequest.model_validate(payload)
            except ValidationError as error:
                logger.debug(f"Malformed move from {player_id}: {error}")
                return MoveResult.reject(
                    RejectionReason.ILLEGAL_MOVE, MALFORMED_MOVE_MESSAGE
                )

            move = Move(
                Square(request.from_square.row, request.from_square.col),
                Square(request.to_square.row, request.to_square.col),
            )
            return self._propose_move(assignment.color, move)

    def reset_session(self) -> GameStateResponse:
        """Throw the current game away and start over. Seats stay as they are."""
        with self._lock:
            self.game = Game.new_game()
            logger.info("Game reset")
            return self._current_state()

    def get_current_state(self) -> GameStateResponse:
        with self._lock:
            return self._current_state()

    # -- Seats ---
    def join(self, player_id: str) -> PlayerAssignment:
        """
        Seat a new connection. White when an even number of players is already seated, Black otherwise.
        Joining twice with the same id returns the existing seat.
        """
        with self._lock:
            if player_id in self.players:
                return self.players[player_id]

            color = Color.WHITE if len(self.players) % 2 == 0 else Color.BLACK
            assignment = PlayerAssignment(
                id=player_id, color=color, joined_at=datetime.now(timezone.utc)
            )
            self.players[player_id] = assignment
            logger.info(
                f"Player connected: {player_id} as {color} (Total players: {len(self.players)})"
            )
            return assignment

    def leave(self, player_id: str) -> None:
        with self._lock:
            if self.players.pop(player_id, None) is not None:
                logger.info(
                    f"Player disconnected: {player_id} (Total players: {len(self.players)})"
                )

    @property
    def player_count(self) -> int:
        with self._lock:
            return len(self.players)

    # -- Internal helpers (call with the lock held) --
    def _propose_move(self, requester: Color, move: Move) -> MoveResult:
        try:
            side = TO_PIECE_COLOR[Color(requester)]
        except ValueError:
            logger.debug(f"Move from unknown side {requester!r} refused")
            return MoveResult.reject(RejectionReason.NOT_YOUR_TURN, NOT_YOUR_TURN_MESSAGE)

        try:
            record = self.game.make_move(
                side,
                move,
                allow_after_game_over=not self.settings.reject_moves_after_game_over,
            )
        except NotYourTurnError as error:
            logger.debug(f"{requester} tried {move}: {error}")
            return MoveResult.reject(RejectionReason.NOT_YOUR_TURN, NOT_YOUR_TURN_MESSAGE)
        except GameOverError as error:
            logger.debug(f"{requester} tried {move}: {error}")
            return MoveResult.reject(RejectionReason.ILLEGAL_MOVE, GAME_OVER_MESSAGE)
        except GameError as error:
            logger.debug(f"{requester} tried {move}: {error}")
            return MoveResult.reject(RejectionReason.ILLEGAL_MOVE, ILLEGAL_MOVE_MESSAGE)

        logger.info(
            f"Move made: {record.piece.to_code()} from {move.from_square.to_algebraic()} to {move.to_square.to_algebraic()}"
        )
        if self.game.game_over:
            logger.info(f"Game Over! Winner: {self.game.winner}")
        return MoveResult.accept(self._current_state())

    def _current_state(self) -> GameStateResponse:
        return GameStateResponse.from_model(self.game.to_model())
