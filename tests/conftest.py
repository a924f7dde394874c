"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.chess.board import EMPTY_ROWS, Board
from src.chess.pieces import Piece
from src.chess.square import Square

BoardFactory = Callable[[dict[str, str]], Board]


@pytest.fixture
def board_with_pieces() -> BoardFactory:
    """Call the inner function with {algebraic square: piece code}, ex. {"e1": "K", "e8": "k"}. All other squares are empty."""

    def _create_board(pieces: dict[str, str]) -> Board:
        board = Board.from_rows(EMPTY_ROWS)
        for square_name, code in pieces.items():
            board.place_piece(Piece.from_code(code), Square.from_algebraic(square_name))
        return board

    return _create_board


@pytest.fixture
def kings_only_board(board_with_pieces: BoardFactory) -> Board:
    """Kings on their canonical starting squares. Without a king on the board, the game would end on the first move."""
    return board_with_pieces({"e1": "K", "e8": "k"})
