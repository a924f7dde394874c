"""Unit tests for /src/chess/game.py"""

from copy import deepcopy
from datetime import timezone

import pytest

from src.chess.board import Board
from src.chess.game import Game, MoveRecord
from src.chess.moves import Move
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square
from src.core.exceptions import GameOverError, IllegalMoveError, NotYourTurnError
from src.core.shared_types import Winner


def move(from_alg: str, to_alg: str) -> Move:
    return Move(Square.from_algebraic(from_alg), Square.from_algebraic(to_alg))


# Queen raid that ends with the black king being taken: e3, f6, Qh5, a6, Qxe8
KING_CAPTURE_LINE: list[tuple[Color, str, str]] = [
    (Color.WHITE, "e2", "e3"),
    (Color.BLACK, "f7", "f6"),
    (Color.WHITE, "d1", "h5"),
    (Color.BLACK, "a7", "a6"),
    (Color.WHITE, "h5", "e8"),
]


def play(game: Game, line: list[tuple[Color, str, str]]) -> None:
    for color, from_alg, to_alg in line:
        game.make_move(color, move(from_alg, to_alg))


# -- CREATION LOGIC --
def test_new_game() -> None:
    game = Game.new_game()
    assert game.board == Board.starting_position()
    assert game.current_turn == Color.WHITE
    assert not game.game_over
    assert game.winner is None
    assert game.move_history == []
    assert game.captured_pieces == {Color.WHITE: [], Color.BLACK: []}


def test_new_games_do_not_share_state() -> None:
    first = Game.new_game()
    second = Game.new_game()
    first.make_move(Color.WHITE, move("e2", "e4"))
    assert second.board == Board.starting_position()
    assert second.move_history == []


# -- MAKING MOVES --
def test_first_pawn_move() -> None:
    """White opens with e2-e4: pawn moved, e2 empty, Black to move"""
    game = Game.new_game()
    record = game.make_move(Color.WHITE, Move(Square(6, 4), Square(4, 4)))

    assert game.board.piece(Square(4, 4)) == Piece(PieceType.PAWN, Color.WHITE)
    assert game.board.is_empty(Square(6, 4))
    assert game.current_turn == Color.BLACK
    assert game.move_history == [record]
    assert record.piece == Piece(PieceType.PAWN, Color.WHITE)
    assert record.captured_piece.is_empty()
    assert record.player == Color.WHITE
    assert record.timestamp.tzinfo == timezone.utc


def test_not_your_turn() -> None:
    game = Game.new_game()
    with pytest.raises(NotYourTurnError):
        game.make_move(Color.BLACK, move("e7", "e5"))


def test_turn_checked_before_legality() -> None:
    """Black asking to move a white piece while it is White's turn: not your turn"""
    game = Game.new_game()
    with pytest.raises(NotYourTurnError):
        game.make_move(Color.BLACK, move("e2", "e4"))


def test_illegal_move() -> None:
    game = Game.new_game()
    with pytest.raises(IllegalMoveError):
        game.make_move(Color.WHITE, move("e2", "e5"))


@pytest.mark.parametrize(
    "color, proposal",
    [
        (Color.BLACK, move("d7", "d5")),  # not your turn
        (Color.WHITE, move("d1", "d3")),  # queen through own pawn
        (Color.WHITE, move("a1", "a1")),  # null move
        (Color.WHITE, Move(Square(6, 4), Square(8, 4))),  # off the board
        (Color.WHITE, move("e3", "e5")),  # nothing there
    ],
)
def test_rejected_move_leaves_game_untouched(color: Color, proposal: Move) -> None:
    game = Game.new_game()
    game.make_move(Color.WHITE, move("e2", "e4"))
    game.make_move(Color.BLACK, move("d7", "d6"))
    before = deepcopy(game)

    with pytest.raises((NotYourTurnError, IllegalMoveError)):
        game.make_move(color, proposal)

    assert game == before


def test_blocked_queen_after_opening() -> None:
    """e4, d6, then the queen tries to go through the d2 pawn"""
    game = Game.new_game()
    game.make_move(Color.WHITE, Move(Square(6, 4), Square(4, 4)))
    game.make_move(Color.BLACK, Move(Square(1, 3), Square(2, 3)))
    board_before = deepcopy(game.board)

    with pytest.raises(IllegalMoveError):
        game.make_move(Color.WHITE, move("d1", "d3"))
    assert game.board == board_before
    assert game.current_turn == Color.WHITE


# -- CAPTURES --
def test_capture_is_booked_for_the_capturing_side() -> None:
    game = Game.new_game()
    play(
        game,
        [
            (Color.WHITE, "e2", "e4"),
            (Color.BLACK, "d7", "d5"),
            (Color.WHITE, "e4", "d5"),
        ],
    )
    assert game.captured_pieces == {Color.WHITE: [PieceType.PAWN], Color.BLACK: []}
    assert game.move_history[-1].is_capture
    assert game.move_history[-1].captured_piece == Piece(PieceType.PAWN, Color.BLACK)

    game.make_move(Color.BLACK, move("d8", "d5"))
    assert game.captured_pieces == {Color.WHITE: [PieceType.PAWN], Color.BLACK: [PieceType.PAWN]}


def test_non_capture_books_nothing() -> None:
    game = Game.new_game()
    game.make_move(Color.WHITE, move("g1", "f3"))
    assert game.captured_pieces == {Color.WHITE: [], Color.BLACK: []}
    assert not game.move_history[-1].is_capture


# -- END OF THE GAME --
def test_king_capture_ends_game() -> None:
    game = Game.new_game()
    play(game, KING_CAPTURE_LINE)

    assert game.game_over
    assert game.winner == Winner.WHITE
    # the turn does not pass on after the final move
    assert game.current_turn == Color.WHITE
    assert game.captured_pieces[Color.WHITE] == [PieceType.KING]
    assert not game.board.has_king(Color.BLACK)


def test_black_can_win_too(board_with_pieces) -> None:
    board = board_with_pieces({"e1": "K", "e8": "k", "e5": "r"})
    game = Game(board=board, current_turn=Color.BLACK)
    game.make_move(Color.BLACK, move("e5", "e1"))
    assert game.game_over
    assert game.winner == Winner.BLACK
    assert game.current_turn == Color.BLACK


def test_turn_flips_only_on_non_terminal_moves() -> None:
    game = Game.new_game()
    for color, from_alg, to_alg in KING_CAPTURE_LINE:
        turn_before = game.current_turn
        game.make_move(color, move(from_alg, to_alg))
        if game.game_over:
            assert game.current_turn == turn_before
        else:
            assert game.current_turn == turn_before.opponent


def test_no_moves_after_game_over() -> None:
    game = Game.new_game()
    play(game, KING_CAPTURE_LINE)
    before = deepcopy(game)

    with pytest.raises(GameOverError):
        game.make_move(Color.WHITE, move("e8", "e7"))
    assert game == before


def test_moves_after_game_over_when_allowed() -> None:
    """Legacy behaviour: the winner keeps moving (the turn never passes on)"""
    game = Game.new_game()
    play(game, KING_CAPTURE_LINE)
    game.make_move(Color.WHITE, move("e8", "e7"), allow_after_game_over=True)
    assert game.game_over
    assert game.winner == Winner.WHITE
    assert game.current_turn == Color.WHITE
    assert len(game.move_history) == len(KING_CAPTURE_LINE) + 1


# -- BOUNDARY MODEL --
def test_to_model_initial() -> None:
    model = Game.new_game().to_model()
    assert model.board[0] == list("rnbqkbnr")
    assert model.board[7] == list("RNBQKBNR")
    assert model.current_turn == "white"
    assert model.game_over is False
    assert model.winner is None
    assert model.move_history == []
    assert model.captured_pieces == {"white": [], "black": []}


def test_to_model_after_king_capture() -> None:
    """Captured pieces keep their own color in the encoding"""
    game = Game.new_game()
    play(game, KING_CAPTURE_LINE)
    model = game.to_model()

    assert model.winner == "white"
    assert model.game_over is True
    assert model.captured_pieces == {"white": ["k"], "black": []}
    last = model.move_history[-1]
    assert last.from_square == (3, 7)
    assert last.to_square == (0, 4)
    assert last.piece == "Q"
    assert last.captured_piece == "k"
    assert last.player == "white"


def test_move_record_is_immutable() -> None:
    record = MoveRecord(
        move=move("e2", "e4"),
        piece=Piece(PieceType.PAWN, Color.WHITE),
        captured_piece=Piece.empty(),
        player=Color.WHITE,
    )
    with pytest.raises(AttributeError):
        record.player = Color.BLACK  # type: ignore[misc]
