"""
Move validation
----

`validate_move()` answers "may `color` play source -> target right now?" and, if so,
"does it give check?". Failures are returned as values, in a fixed order: the first failing check wins.

1. both squares on the board
2. source and target differ
3. there is a piece on the source, and it is yours
4. the target does not hold one of your own pieces
5. the piece can move that way (per piece type; a king moving two files is a castling request)
6. the move does not leave your own king attacked (tested on a simulated copy)
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Callable, Optional, Self

from src.core.shared_types import Color, PieceType
from src.rules.attacks import is_square_under_attack
from src.rules.board import Board
from src.rules.castling import (
    CastlingRights,
    can_castle,
    castling_side_for,
    execute_castling,
)
from src.rules.execution import execute_move
from src.rules.moves import (
    can_slide_diagonal,
    can_slide_straight,
    deltas,
    is_king_step,
    is_knight_jump,
    is_pawn_diagonal_step,
    pawn_direction,
    pawn_home_row,
)
from src.rules.square import Square, all_squares


class MoveError(StrEnum):
    INVALID_COORDINATES = "Invalid coordinates"
    SAME_SQUARE = "Source and target cannot be the same"
    NO_PIECE_AT_SOURCE = "No piece at source square"
    WRONG_OWNER = "Piece does not belong to player"
    OWN_PIECE_AT_TARGET = "Cannot capture own piece"
    ILLEGAL_PATTERN = "Invalid move for piece type"
    SELF_CHECK = "Move would result in check"


@dataclass(frozen=True)
class MoveValidation:
    valid: bool
    error: Optional[MoveError] = None
    delivers_check: bool = False

    @classmethod
    def accept(cls, delivers_check: bool) -> Self:
        return cls(valid=True, delivers_check=delivers_check)

    @classmethod
    def reject(cls, error: MoveError) -> Self:
        return cls(valid=False, error=error)


# --- PIECE PATTERNS ---
def pawn_pattern(
    board: Board, source: Square, target: Square, color: Color, rights: CastlingRights
) -> bool:
    """
    A pawn:
    - moves by a single square forward onto an empty square.
    - can move by two from its home rank, if both squares in front of it are empty
    - takes diagonally (and only moves diagonally when it takes)
    """
    d_row, d_col = deltas(source, target)
    direction = pawn_direction(color)
    if d_col == 0:
        if d_row == direction:
            return board.is_empty(target)
        if d_row == 2 * direction and source.row == pawn_home_row(color):
            return board.is_empty(source.offset(direction, 0)) and board.is_empty(target)
        return False
    return is_pawn_diagonal_step(source, target, color) and not board.is_empty(target)


def knight_pattern(
    board: Board, source: Square, target: Square, color: Color, rights: CastlingRights
) -> bool:
    """Knights jump, so nothing in between matters"""
    return is_knight_jump(source, target)


def bishop_pattern(
    board: Board, source: Square, target: Square, color: Color, rights: CastlingRights
) -> bool:
    return can_slide_diagonal(board, source, target)


def rook_pattern(
    board: Board, source: Square, target: Square, color: Color, rights: CastlingRights
) -> bool:
    return can_slide_straight(board, source, target)


def queen_pattern(
    board: Board, source: Square, target: Square, color: Color, rights: CastlingRights
) -> bool:
    return can_slide_straight(board, source, target) or can_slide_diagonal(
        board, source, target
    )


def king_pattern(
    board: Board, source: Square, target: Square, color: Color, rights: CastlingRights
) -> bool:
    """A single step in any direction, or two files sideways when castling is allowed."""
    side = castling_side_for(source, target)
    if side is not None:
        return can_castle(board, color, side, rights)
    return is_king_step(source, target)


# --- STRATEGY PATTERN: MOVEMENT RULES ---
PatternFn = Callable[[Board, Square, Square, Color, CastlingRights], bool]
MOVEMENT_RULES: dict[PieceType, PatternFn] = {
    PieceType.PAWN: pawn_pattern,
    PieceType.KNIGHT: knight_pattern,
    PieceType.BISHOP: bishop_pattern,
    PieceType.ROOK: rook_pattern,
    PieceType.QUEEN: queen_pattern,
    PieceType.KING: king_pattern,
}


def simulate_move(board: Board, source: Square, target: Square) -> Board:
    """The position after the move, on a private copy. Castles move the rook as well."""
    piece = board.piece_at(source)
    side = castling_side_for(source, target)
    if piece is not None and piece.kind == PieceType.KING and side is not None:
        return execute_castling(board, piece.color, side).updated_board
    return execute_move(board, source, target).updated_board


def is_king_attacked(board: Board, color: Color) -> bool:
    king = board.king_square(color)
    return king is not None and is_square_under_attack(board, king, color.opponent)


def validate_move(
    board: Board,
    source: Square,
    target: Square,
    color: Color,
    castling_rights: Optional[CastlingRights] = None,
) -> MoveValidation:
    """Castling rights default to none at all: pass the game's rights to allow castling."""
    rights = castling_rights if castling_rights is not None else CastlingRights.none()

    if not (source.is_within_bounds() and target.is_within_bounds()):
        return MoveValidation.reject(MoveError.INVALID_COORDINATES)

    if source == target:
        return MoveValidation.reject(MoveError.SAME_SQUARE)

    piece = board.piece_at(source)
    if piece is None:
        return MoveValidation.reject(MoveError.NO_PIECE_AT_SOURCE)
    if piece.color != color:
        return MoveValidation.reject(MoveError.WRONG_OWNER)

    if board.is_own_piece(target, color):
        return MoveValidation.reject(MoveError.OWN_PIECE_AT_TARGET)

    if not MOVEMENT_RULES[piece.kind](board, source, target, color, rights):
        return MoveValidation.reject(MoveError.ILLEGAL_PATTERN)

    after_move = simulate_move(board, source, target)
    if is_king_attacked(after_move, color):
        return MoveValidation.reject(MoveError.SELF_CHECK)

    return MoveValidation.accept(delivers_check=is_king_attacked(after_move, color.opponent))


def legal_targets(
    board: Board,
    source: Square,
    color: Color,
    castling_rights: Optional[CastlingRights] = None,
) -> list[Square]:
    """Every square the piece on `source` may legally move to."""
    return [
        target
        for target in all_squares()
        if validate_move(board, source, target, color, castling_rights).valid
    ]
