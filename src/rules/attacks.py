"""
Attack detection
----

"Does this color attack that square?" Answered by walking every piece of the attacking color and
asking whether its basic movement pattern reaches the square.

NOTE: Only ever pass a board that already reflects the position you are asking about.
For "would this move leave me in check" questions that is a simulated copy, never the live board.
"""

from typing import Callable

from src.core.shared_types import Color, PieceType
from src.rules.moves import (
    Board,
    can_slide_diagonal,
    can_slide_straight,
    is_king_step,
    is_knight_jump,
    is_pawn_diagonal_step,
)
from src.rules.square import Square, all_squares


def pawn_attacks(board: Board, origin: Square, target: Square, color: Color) -> bool:
    """Pawns attack the two forward diagonals only, never the square straight ahead."""
    return is_pawn_diagonal_step(origin, target, color)


def knight_attacks(board: Board, origin: Square, target: Square, color: Color) -> bool:
    return is_knight_jump(origin, target)


def bishop_attacks(board: Board, origin: Square, target: Square, color: Color) -> bool:
    return can_slide_diagonal(board, origin, target)


def rook_attacks(board: Board, origin: Square, target: Square, color: Color) -> bool:
    return can_slide_straight(board, origin, target)


def queen_attacks(board: Board, origin: Square, target: Square, color: Color) -> bool:
    return can_slide_straight(board, origin, target) or can_slide_diagonal(
        board, origin, target
    )


def king_attacks(board: Board, origin: Square, target: Square, color: Color) -> bool:
    return is_king_step(origin, target)


# --- STRATEGY PATTERN: ATTACKING RULES ---
AttackFn = Callable[[Board, Square, Square, Color], bool]
ATTACK_RULES: dict[PieceType, AttackFn] = {
    PieceType.PAWN: pawn_attacks,
    PieceType.KNIGHT: knight_attacks,
    PieceType.BISHOP: bishop_attacks,
    PieceType.ROOK: rook_attacks,
    PieceType.QUEEN: queen_attacks,
    PieceType.KING: king_attacks,
}


def is_square_under_attack(board: Board, square: Square, attacker: Color) -> bool:
    for origin in all_squares():
        piece = board.piece_at(origin)
        if piece is None or piece.color != attacker:
            continue
        if ATTACK_RULES[piece.kind](board, origin, square, attacker):
            return True
    return False
