"""Requests and Response models (the messages the transport layer sends to/receives from the browser client)"""

from datetime import datetime
from typing import Optional, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.core.exceptions import InvalidRequestError
from src.core.models import GameModel, MoveRecordModel
from src.core.shared_types import Color, RejectionReason, Winner

PieceCode = str
PieceColor = str

# Texts shown to the player when a move is refused
NOT_YOUR_TURN_MESSAGE = "Not your turn!"
ILLEGAL_MOVE_MESSAGE = "Invalid move - check chess rules!"
MALFORMED_MOVE_MESSAGE = "Error processing move"
GAME_OVER_MESSAGE = "Game over - reset the game to play again"


class WireModel(BaseModel):
    """The browser client speaks camelCase"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SquareModel(WireModel):
    # NOTE: no range validation on purpose. Squares off the board are an illegal move, not a malformed request.
    row: int
    col: int


# --- REQUEST MODELS ---
class MoveRequest(WireModel):
    from_square: SquareModel = Field(alias="from")
    to_square: SquareModel = Field(alias="to")


# --- RESPONSE MODELS ---
class MoveRecordResponse(WireModel):
    from_square: SquareModel = Field(alias="from")
    to_square: SquareModel = Field(alias="to")
    piece: PieceCode
    captured_piece: PieceCode
    player: Color
    timestamp: datetime

    @classmethod
    def from_model(cls, model: MoveRecordModel) -> Self:
        from_row, from_col = model.from_square
        to_row, to_col = model.to_square
        return cls(
            from_square=SquareModel(row=from_row, col=from_col),
            to_square=SquareModel(row=to_row, col=to_col),
            piece=model.piece,
            captured_piece=model.captured_piece,
            player=Color(model.player),
            timestamp=model.timestamp,
        )


class GameStateResponse(WireModel):
    board: list[list[PieceCode]]
    current_player: Color
    game_over: bool
    winner: Optional[Winner]
    move_history: list[MoveRecordResponse]
    captured_pieces: dict[PieceColor, list[PieceCode]]

    @field_validator("board")
    @classmethod
    def validate_board(cls, value: list[list[PieceCode]]) -> list[list[PieceCode]]:
        if len(value) != 8 or any(len(row) != 8 for row in value):
            raise InvalidRequestError("Board must be an 8x8 grid of piece codes.")
        return value

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        return cls(
            board=model.board,
            current_player=Color(model.current_turn),
            game_over=model.game_over,
            winner=Winner(model.winner) if model.winner else None,
            move_history=[
                MoveRecordResponse.from_model(record) for record in model.move_history
            ],
            captured_pieces=model.captured_pieces,
        )

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class MoveResult(WireModel):
    """Either the move went through (and the whole new state comes along), or the reason it did not."""

    accepted: bool
    state: Optional[GameStateResponse] = None
    reason: Optional[RejectionReason] = None
    message: Optional[str] = None

    @classmethod
    def accept(cls, state: GameStateResponse) -> Self:
        return cls(accepted=True, state=state)

    @classmethod
    def reject(cls, reason: RejectionReason, message: str) -> Self:
        return cls(accepted=False, reason=reason, message=message)


class PlayerAssignment(WireModel):
    id: str
    color: Color
    joined_at: datetime
