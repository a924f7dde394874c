"""The Game board: the configuration of pieces on the 8x8 grid"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Self

from src.chess.moves import Move
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import InvalidRequestError

# Row 0 first. Uppercase: White, lowercase: Black, dot: empty.
STARTING_ROWS: tuple[str, ...] = (
    "rnbqkbnr",
    "pppppppp",
    "........",
    "........",
    "........",
    "........",
    "PPPPPPPP",
    "RNBQKBNR",
)
EMPTY_ROWS: tuple[str, ...] = ("." * BOARD_DIMENSIONS[1],) * BOARD_DIMENSIONS[0]


@dataclass
class Board:
    position: dict[Square, Piece]

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_rows(STARTING_ROWS)

    @classmethod
    def empty(cls) -> Self:
        return cls.from_rows(EMPTY_ROWS)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[str]]) -> Self:
        """Construct a board from one piece code per square, top row (row 0) first.

        ex. the standard starting position reads
        rnbqkbnr
        pppppppp
        ........  (x4)
        PPPPPPPP
        RNBQKBNR
        Each row may be a string of 8 characters or a list of 8 single-character strings (the wire format).
        """
        if len(rows) != BOARD_DIMENSIONS[0]:
            raise InvalidRequestError(
                f"Board needs {BOARD_DIMENSIONS[0]} rows, got {len(rows)}."
            )

        position: dict[Square, Piece] = {}
        for row_idx, row in enumerate(rows):
            if len(row) != BOARD_DIMENSIONS[1]:
                raise InvalidRequestError(
                    f"Row {row_idx} needs {BOARD_DIMENSIONS[1]} squares, got {len(row)}."
                )
            for col_idx, character in enumerate(row):
                position[Square(row_idx, col_idx)] = Piece.from_code(character)
        return cls(position)

    def to_grid(self) -> list[list[str]]:
        """The wire format: 8 lists of 8 piece codes."""
        return [
            [self.piece(Square(row, col)).to_code() for col in range(BOARD_DIMENSIONS[1])]
            for row in range(BOARD_DIMENSIONS[0])
        ]

    def piece(self, square: Square) -> Piece:
        return self.position[square]

    def is_empty(self, square: Square) -> bool:
        return self.piece(square).is_empty()

    def locate_pieces(self, piece_type: PieceType, color: Color) -> list[Square]:
        return [
            square
            for square, piece in self.position.items()
            if piece.type == piece_type and piece.color == color
        ]

    def has_king(self, color: Color) -> bool:
        """Kings can get captured in this variant, so this is not a given"""
        return bool(self.locate_pieces(PieceType.KING, color))

    def place_piece(self, piece: Piece, square: Square) -> None:
        self.position[square] = piece

    def remove_piece(self, square: Square) -> None:
        self.position[square] = Piece.empty()

    def move_piece(self, move: Move) -> None:
        """Update the position on the board. Whatever stood on the target square is gone."""
        piece_that_moved = self.piece(move.from_square)
        self.remove_piece(move.from_square)
        self.place_piece(piece_that_moved, move.to_square)
