"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
The domain layer (lower) fills them in, the API layer (higher) turns them into wire messages.
(Decouples the domain objects from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

# Type aliases to make the models easier to read
PieceCode = str
PieceColor = str


@dataclass(frozen=True)
class MoveRecordModel:
    from_square: tuple[int, int]
    to_square: tuple[int, int]
    piece: PieceCode
    captured_piece: PieceCode
    player: PieceColor
    timestamp: datetime


@dataclass
class GameModel:
    """Transport-safe representation of the game state used between Service and Game layers."""

    board: list[list[PieceCode]]
    current_turn: PieceColor
    game_over: bool
    winner: Optional[str]
    move_history: list[MoveRecordModel]
    captured_pieces: dict[PieceColor, list[PieceCode]]
