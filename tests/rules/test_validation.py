"""Unit tests for src/rules/validation.py"""

import pytest

from src.core.shared_types import Color, PieceType
from src.rules.board import Board
from src.rules.castling import CastlingRights
from src.rules.execution import execute_move
from src.rules.fen import parse_fen
from src.rules.square import Square
from src.rules.validation import (
    MoveError,
    MoveValidation,
    is_king_attacked,
    legal_targets,
    simulate_move,
    validate_move,
)


def sq(name: str) -> Square:
    return Square.from_algebraic(name)


def test_error_messages() -> None:
    assert [error.value for error in MoveError] == [
        "Invalid coordinates",
        "Source and target cannot be the same",
        "No piece at source square",
        "Piece does not belong to player",
        "Cannot capture own piece",
        "Invalid move for piece type",
        "Move would result in check",
    ]


@pytest.mark.parametrize(
    "source, target, error",
    [
        (Square(8, 0), sq("a2"), MoveError.INVALID_COORDINATES),
        (sq("e2"), Square(6, -1), MoveError.INVALID_COORDINATES),
        (sq("e2"), sq("e2"), MoveError.SAME_SQUARE),
        (sq("e4"), sq("e5"), MoveError.NO_PIECE_AT_SOURCE),
        (sq("e7"), sq("e5"), MoveError.WRONG_OWNER),
        (sq("a1"), sq("a2"), MoveError.OWN_PIECE_AT_TARGET),
        (sq("e2"), sq("e5"), MoveError.ILLEGAL_PATTERN),
        (sq("a1"), sq("a3"), MoveError.ILLEGAL_PATTERN),
        (sq("b1"), sq("b3"), MoveError.ILLEGAL_PATTERN),
        (sq("e1"), sq("g1"), MoveError.OWN_PIECE_AT_TARGET),
    ],
)
def test_rejections_from_start(source: Square, target: Square, error: MoveError) -> None:
    result = validate_move(Board.starting_position(), source, target, Color.WHITE)
    assert result == MoveValidation(valid=False, error=error)


@pytest.mark.parametrize("source, target", [("e2", "e4"), ("e2", "e3"), ("g1", "f3"), ("b1", "a3")])
def test_opening_moves_are_valid(source: str, target: str) -> None:
    result = validate_move(Board.starting_position(), sq(source), sq(target), Color.WHITE)
    assert result.valid
    assert result.error is None
    assert not result.delivers_check


def test_pawn_rules() -> None:
    board = Board.from_fen("4k3/8/8/8/8/4n3/3pP3/4K3")
    # blocked straight ahead, both for a single and a double step
    assert validate_move(board, sq("e2"), sq("e3"), Color.WHITE).error == MoveError.ILLEGAL_PATTERN
    assert validate_move(board, sq("e2"), sq("e4"), Color.WHITE).error == MoveError.ILLEGAL_PATTERN
    # diagonal only with a capture
    assert validate_move(board, sq("e2"), sq("f3"), Color.WHITE).error == MoveError.ILLEGAL_PATTERN
    # d2 pawn is black and gives check: the king has to deal with it
    assert validate_move(board, sq("e1"), sq("d2"), Color.WHITE).valid


def test_pawn_double_step_only_from_home_row() -> None:
    board = Board.from_fen("4k3/8/8/8/8/4P3/8/4K3")
    assert validate_move(board, sq("e3"), sq("e5"), Color.WHITE).error == MoveError.ILLEGAL_PATTERN


def test_pinned_piece_cannot_move_away() -> None:
    board = Board.from_fen("4k3/4r3/8/8/8/8/4B3/4K3")
    result = validate_move(board, sq("e2"), sq("d3"), Color.WHITE)
    assert result == MoveValidation(valid=False, error=MoveError.SELF_CHECK)


def test_king_cannot_step_into_attack() -> None:
    board = Board.from_fen("4k3/8/8/8/8/8/3r4/7K")
    assert validate_move(board, sq("h1"), sq("h2"), Color.WHITE).error == MoveError.SELF_CHECK
    assert validate_move(board, sq("h1"), sq("g1"), Color.WHITE).valid


def test_delivers_check() -> None:
    board = Board.from_fen("4k3/8/8/8/8/8/8/R3K3")
    assert validate_move(board, sq("a1"), sq("a8"), Color.WHITE).delivers_check
    assert not validate_move(board, sq("a1"), sq("a7"), Color.WHITE).delivers_check


def test_castling_needs_rights() -> None:
    board = Board.from_fen("r3k2r/8/8/8/8/8/8/R3K2R")
    # no rights passed: no castling
    without_rights = validate_move(board, sq("e1"), sq("g1"), Color.WHITE)
    assert without_rights.error == MoveError.ILLEGAL_PATTERN

    with_rights = validate_move(board, sq("e1"), sq("g1"), Color.WHITE, CastlingRights())
    assert with_rights.valid


def test_simulate_castle_moves_the_rook() -> None:
    board = Board.from_fen("r3k2r/8/8/8/8/8/8/R3K2R")
    after = simulate_move(board, sq("e1"), sq("c1"))
    assert after.to_fen() == "r3k2r/8/8/8/8/8/8/2KR3R"
    # input board left alone
    assert board.to_fen() == "r3k2r/8/8/8/8/8/8/R3K2R"


def test_legal_targets() -> None:
    board = Board.starting_position()
    assert legal_targets(board, sq("g1"), Color.WHITE) == [sq("f3"), sq("h3")]
    assert legal_targets(board, sq("e1"), Color.WHITE) == []


POSITIONS = [
    "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
    "r3k2r/pppq1ppp/2npbn2/4p3/2B1P3/2NP1N2/PPP2PPP/R1BQ1RK1 b kq - 3 9",
    "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1",
    "4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1",
    "8/P6k/8/8/8/8/8/4K3 w - - 0 1",
    "4k3/8/8/8/8/8/p7/4K3 b - - 0 1",
]


@pytest.mark.parametrize("fen", POSITIONS)
def test_accepted_moves_never_leave_own_king_attacked(fen: str) -> None:
    state = parse_fen(fen)
    color = state.current_player
    for source in state.board.squares_of(color):
        for target in legal_targets(state.board, source, color, state.castling_rights):
            after = simulate_move(state.board, source, target)
            assert not is_king_attacked(after, color)


@pytest.mark.parametrize("fen", POSITIONS)
def test_execute_after_validate(fen: str) -> None:
    """Source ends up empty, target holds the moved piece (a queen when a pawn reached the last rank)."""
    state = parse_fen(fen)
    color = state.current_player
    for source in state.board.squares_of(color):
        piece = state.board.piece_at(source)
        assert piece is not None
        for target in legal_targets(state.board, source, color):
            updated = execute_move(state.board, source, target).updated_board
            assert updated.is_empty(source)
            if piece.kind == PieceType.PAWN and target.row in (0, 7):
                assert updated.piece_at(target) == piece.promoted(PieceType.QUEEN)
            else:
                assert updated.piece_at(target) == piece
