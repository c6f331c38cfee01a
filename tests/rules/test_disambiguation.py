"""Unit tests for src/rules/disambiguation.py"""

from typing import Union

import pytest

from src.core.exceptions import AmbiguousMoveError
from src.core.shared_types import Color, PieceType
from src.rules.board import Board
from src.rules.disambiguation import PotentialMove, choose_candidate, find_possible_moves
from src.rules.pieces import Piece
from src.rules.square import Square
from src.rules.validation import validate_move


def sq(name: str) -> Square:
    return Square.from_algebraic(name)


def sources(candidates: list[PotentialMove]) -> list[str]:
    return [candidate.source.to_algebraic() for candidate in candidates]


def test_both_rooks_even_if_one_is_blocked() -> None:
    board = Board.from_fen("4k3/8/8/8/8/8/8/R3K2R")
    candidates = find_possible_moves(board, Color.WHITE, "R", sq("d1"))

    assert sources(candidates) == ["a1", "h1"]
    assert all(c.piece == Piece(PieceType.ROOK, Color.WHITE) for c in candidates)
    # only one of them survives validation
    assert [validate_move(board, c.source, sq("d1"), Color.WHITE).valid for c in candidates] == [True, False]


@pytest.mark.parametrize("letter", ["n", "N", PieceType.KNIGHT])
def test_letter_case_and_piece_type(letter: Union[str, PieceType]) -> None:
    candidates = find_possible_moves(Board.starting_position(), Color.WHITE, letter, sq("d2"))
    assert sources(candidates) == ["b1"]


def test_only_own_color() -> None:
    candidates = find_possible_moves(Board.starting_position(), Color.BLACK, "n", sq("f6"))
    assert sources(candidates) == ["g8"]


@pytest.mark.parametrize(
    "target, expected",
    [
        ("e3", ["e2"]),
        ("e4", ["e2"]),
        ("d3", ["c2", "e2"]),
        ("e5", []),
    ],
)
def test_pawn_reach(target: str, expected: list[str]) -> None:
    board = Board.from_fen("4k3/8/8/8/8/8/2P1P3/4K3")
    assert sources(find_possible_moves(board, Color.WHITE, "p", sq(target))) == expected


def test_pawn_double_step_from_home_row_only() -> None:
    board = Board.from_fen("4k3/8/8/8/8/4P3/8/4K3")
    assert find_possible_moves(board, Color.WHITE, "p", sq("e5")) == []


def test_king_does_not_reach_castling_squares() -> None:
    board = Board.from_fen("4k3/8/8/8/8/8/8/4K2R")
    assert find_possible_moves(board, Color.WHITE, "k", sq("g1")) == []


def test_unknown_letter() -> None:
    with pytest.raises(KeyError):
        find_possible_moves(Board.starting_position(), Color.WHITE, "x", sq("e4"))


def test_choose_candidate_is_one_based() -> None:
    board = Board.from_fen("4k3/8/8/8/8/8/8/R3K2R")
    candidates = find_possible_moves(board, Color.WHITE, "r", sq("d1"))
    assert choose_candidate(candidates, 1).source == sq("a1")
    assert choose_candidate(candidates, 2).source == sq("h1")


@pytest.mark.parametrize("index", [0, 3, -1])
def test_choose_candidate_out_of_range(index: int) -> None:
    board = Board.from_fen("4k3/8/8/8/8/8/8/R3K2R")
    candidates = find_possible_moves(board, Color.WHITE, "r", sq("d1"))
    with pytest.raises(AmbiguousMoveError) as exc_info:
        choose_candidate(candidates, index)
    assert exc_info.value.candidates == ["a1", "h1"]
