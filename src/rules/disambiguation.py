"""
Which of my pieces could the player mean?
----

A voice command like "rook to d4" names a piece type and a target square, not a source square.
`find_possible_moves()` lists every own piece of that type whose basic movement shape reaches the target.

NOTE: shape only. Blockers, pins, checks, castling and en passant are all ignored, so the list may contain
pieces that cannot actually make the move, but it never misses one that can.
The choice the player makes from this list must still go through `validate_move()`.
"""

from dataclasses import dataclass
from typing import Callable, Union

from src.core.exceptions import AmbiguousMoveError
from src.core.shared_types import Color, PieceType
from src.rules.board import Board
from src.rules.moves import (
    deltas,
    is_diagonal_line,
    is_king_step,
    is_knight_jump,
    is_pawn_diagonal_step,
    is_straight_line,
    pawn_direction,
    pawn_home_row,
)
from src.rules.pieces import Piece, piece_type_from_letter
from src.rules.square import Square


@dataclass(frozen=True)
class PotentialMove:
    source: Square
    piece: Piece


def pawn_could_reach(source: Square, target: Square, color: Color) -> bool:
    """One step forward, two from the home rank, or a diagonal step."""
    d_row, d_col = deltas(source, target)
    direction = pawn_direction(color)
    if d_col == 0 and d_row == direction:
        return True
    if d_col == 0 and d_row == 2 * direction and source.row == pawn_home_row(color):
        return True
    return is_pawn_diagonal_step(source, target, color)


def knight_could_reach(source: Square, target: Square, color: Color) -> bool:
    return is_knight_jump(source, target)


def bishop_could_reach(source: Square, target: Square, color: Color) -> bool:
    return is_diagonal_line(source, target)


def rook_could_reach(source: Square, target: Square, color: Color) -> bool:
    return is_straight_line(source, target)


def queen_could_reach(source: Square, target: Square, color: Color) -> bool:
    return is_straight_line(source, target) or is_diagonal_line(source, target)


def king_could_reach(source: Square, target: Square, color: Color) -> bool:
    """Castling is a request in its own right, so the king only reaches its neighbours here."""
    return is_king_step(source, target)


ReachFn = Callable[[Square, Square, Color], bool]
REACH_RULES: dict[PieceType, ReachFn] = {
    PieceType.PAWN: pawn_could_reach,
    PieceType.KNIGHT: knight_could_reach,
    PieceType.BISHOP: bishop_could_reach,
    PieceType.ROOK: rook_could_reach,
    PieceType.QUEEN: queen_could_reach,
    PieceType.KING: king_could_reach,
}


def find_possible_moves(
    board: Board,
    color: Color,
    piece_letter: Union[str, PieceType],
    target: Square,
) -> list[PotentialMove]:
    """`piece_letter` is a FEN letter in either case ('N' and 'n' both mean knight) or a PieceType."""
    kind = (
        piece_letter
        if isinstance(piece_letter, PieceType)
        else piece_type_from_letter(piece_letter)
    )
    wanted = Piece(kind, color)
    reaches = REACH_RULES[kind]
    return [
        PotentialMove(source, wanted)
        for source in board.squares_of(color)
        if board.piece_at(source) == wanted and reaches(source, target, color)
    ]


def choose_candidate(candidates: list[PotentialMove], index: int) -> PotentialMove:
    """Resolve the player's answer to "which one?". `index` is 1-based, the way it is read out to the player."""
    if not 1 <= index <= len(candidates):
        raise AmbiguousMoveError(
            f"Option {index} does not exist. Pick a number from 1 to {len(candidates)}.",
            candidates=[candidate.source.to_algebraic() for candidate in candidates],
        )
    return candidates[index - 1]
