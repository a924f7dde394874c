"""
Geometry/Base movement rules and the checks that decide if a proposed move is legal.

Key idea: Use strategy pattern to define the movement geometry for each piece type.

Everything in here is a pure function of the board and the side to move. The Game applies the moves.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional, Protocol

from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square
from src.core.shared_types import Winner


class Board(Protocol):
    """Just the parts the movement rules need"""

    def piece(self, square: Square) -> Piece: ...
    def is_empty(self, square: Square) -> bool: ...
    def has_king(self, color: Color) -> bool: ...


Vector = tuple[int, int]

# White moves UP the board (towards row 0), Black moves DOWN
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_STARTING_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}


@dataclass(frozen=True)
class Move:
    """A proposed move: just the two squares. Whether it is legal is decided by `is_legal_move()`"""

    from_square: Square
    to_square: Square

    @property
    def delta(self) -> Vector:
        return (
            self.to_square.row - self.from_square.row,
            self.to_square.col - self.from_square.col,
        )

    def __str__(self) -> str:
        return f"({self.from_square.row},{self.from_square.col})->({self.to_square.row},{self.to_square.col})"


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


# --- PATH CLEARANCE ---
def path_is_clear(board: Board, from_square: Square, to_square: Square) -> bool:
    """
    Walk the line between the two squares (exclusive on both ends) one step at a time.
    ----

    Each step changes the row and the column by -1, 0 or 1 towards the target square,
    so this only makes sense for straight or diagonal lines (which is all the sliding pieces need).
    """
    row_step = _sign(to_square.row - from_square.row)
    col_step = _sign(to_square.col - from_square.col)

    row = from_square.row + row_step
    col = from_square.col + col_step
    while (row, col) != (to_square.row, to_square.col):
        if not board.is_empty(Square(row, col)):
            return False
        row += row_step
        col += col_step
    return True


# --- MOVEMENT RULES ---
def is_valid_pawn_move(move: Move, board: Board, color: Color) -> bool:
    """
    A pawn:
    - moves by a single square forward onto an empty square.
    - It can move by two in their first move (so when on their starting row). The square it jumps over is NOT checked.
    - takes diagonally (one square forward), only if something stands there.

    No en passant, no promotion.
    """
    dr, dc = move.delta
    forward = PAWN_DIRECTION[color]
    target_empty = board.is_empty(move.to_square)

    if dc == 0:
        if dr == forward and target_empty:
            return True
        on_starting_row = move.from_square.row == PAWN_STARTING_ROW[color]
        return on_starting_row and dr == 2 * forward and target_empty

    return abs(dc) == 1 and dr == forward and not target_empty


def is_valid_knight_move(move: Move, board: Board, color: Color) -> bool:
    """Knights jump in an L-shape, nothing in between matters"""
    dr, dc = move.delta
    return (abs(dr), abs(dc)) in {(2, 1), (1, 2)}


def is_valid_bishop_move(move: Move, board: Board, color: Color) -> bool:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    dr, dc = move.delta
    if not (abs(dr) == abs(dc) and dr != 0):
        return False
    return path_is_clear(board, move.from_square, move.to_square)


def is_valid_rook_move(move: Move, board: Board, color: Color) -> bool:
    """Rooks move either horizontally or vertically"""
    dr, dc = move.delta
    if not ((dr == 0) ^ (dc == 0)):
        return False
    return path_is_clear(board, move.from_square, move.to_square)


def is_valid_queen_move(move: Move, board: Board, color: Color) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return is_valid_rook_move(move, board, color) or is_valid_bishop_move(
        move, board, color
    )


def is_valid_king_move(move: Move, board: Board, color: Color) -> bool:
    """
    The king can move by a single square at the time. No castling.
    """
    dr, dc = move.delta
    return abs(dr) <= 1 and abs(dc) <= 1


# -- STRATEGY PATTERN: MOVEMENT RULES ---
MovementRuleFn = Callable[[Move, Board, Color], bool]
MOVEMENT_RULES: dict[PieceType, MovementRuleFn] = {
    PieceType.PAWN: is_valid_pawn_move,
    PieceType.KNIGHT: is_valid_knight_move,
    PieceType.BISHOP: is_valid_bishop_move,
    PieceType.ROOK: is_valid_rook_move,
    PieceType.QUEEN: is_valid_queen_move,
    PieceType.KING: is_valid_king_move,
}


def is_legal_move(board: Board, current_turn: Color, move: Move) -> bool:
    """
    Decide if the move can be played
    -----

    1. both squares are on the board
    2. there is a piece to move
    3. it is a piece of the side to move
    4. you do not take your own piece
    5. you actually move somewhere
    6. the piece is allowed to move like that (see MOVEMENT_RULES)
    """
    if not (move.from_square.is_within_bounds() and move.to_square.is_within_bounds()):
        return False

    moving_piece = board.piece(move.from_square)
    if moving_piece.is_empty():
        return False

    if moving_piece.color != current_turn:
        return False

    target_piece = board.piece(move.to_square)
    if not target_piece.is_empty() and target_piece.color == moving_piece.color:
        return False

    if move.from_square == move.to_square:
        return False

    # unknown piece types never get to move
    movement_rule: Optional[MovementRuleFn] = MOVEMENT_RULES.get(moving_piece.type)
    if movement_rule is None:
        return False
    return movement_rule(move, board, moving_piece.color)


# --- CHECKS FOR ENDING THE GAME ---
class TerminalKind(Enum):
    NONE = auto()
    CHECKMATE = auto()
    STALEMATE = auto()


@dataclass(frozen=True)
class TerminalState:
    kind: TerminalKind
    winner: Optional[Winner] = None

    @property
    def is_terminal(self) -> bool:
        return self.kind != TerminalKind.NONE


NOT_TERMINAL = TerminalState(TerminalKind.NONE)


def is_checkmate(board: Board, mover: Color) -> bool:
    """
    Simplified: there is no check or pin detection.
    Kings can simply be taken, and the game is won the moment the opponent has no king left on the board.
    """
    return not board.has_king(mover.opponent)


def is_stalemate(board: Board, mover: Color) -> bool:
    """Stalemate is never detected"""
    return False


def detect_terminal_state(board: Board, mover: Color) -> TerminalState:
    """Called right after `mover` made a move, before the turn passes to the opponent."""
    if is_checkmate(board, mover):
        return TerminalState(TerminalKind.CHECKMATE, Winner(mover.name.lower()))
    if is_stalemate(board, mover):
        return TerminalState(TerminalKind.STALEMATE, Winner.DRAW)
    return NOT_TERMINAL
