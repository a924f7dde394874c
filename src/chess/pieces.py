"""Defines the types of chess pieces"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self

from src.core.exceptions import InvalidRequestError

EMPTY_CODE = "."


class PieceType(Enum):
    EMPTY = auto()
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    NONE = auto()
    WHITE = auto()
    BLACK = auto()

    @property
    def opponent(self) -> "Color":
        if self == Color.WHITE:
            return Color.BLACK
        if self == Color.BLACK:
            return Color.WHITE
        return Color.NONE


CODE_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_CODE: dict[PieceType, str] = {
    value: key for key, value in CODE_TO_PIECE.items()
}


@dataclass(frozen=True)
class Piece:
    type: PieceType
    color: Color

    @classmethod
    def empty(cls) -> Self:
        return cls(PieceType.EMPTY, Color.NONE)

    @classmethod
    def from_code(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces, a dot: nothing there
        if character == EMPTY_CODE:
            return cls.empty()
        if character.lower() not in CODE_TO_PIECE:
            raise InvalidRequestError(f"Unknown piece code: {character!r}")
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = CODE_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_code(self) -> str:
        if self.is_empty():
            return EMPTY_CODE
        return (
            PIECE_TO_CODE[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_CODE[self.type].lower()
        )

    def is_empty(self) -> bool:
        return self.type == PieceType.EMPTY
