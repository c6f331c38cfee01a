"""
Geometry of piece movement: directions, rays and the basic move data type.

Nothing in here knows about checks or castling rights. Legality is decided by the validator.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, Self

from src.core.exceptions import InvalidSquareError
from src.core.shared_types import Color, PieceType
from src.rules.pieces import FEN_TO_PIECE, PIECE_TO_FEN, Piece
from src.rules.square import Square


class Board(Protocol):
    """Just the part of the board the geometry helpers need"""

    def piece_at(self, square: Square) -> Optional[Piece]: ...


# (d_row, d_col)
Vector = tuple[int, int]

STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
KING_DELTAS: list[Vector] = STRAIGHTS + DIAGONALS


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    source: Square
    target: Square
    promote_to: Optional[PieceType] = None

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface notation: <from><to>[promotion]

        * "e2e4": move the piece on e2 to e4
        * "e7e8q": (pawn) moves from e7 to e8 and promotes to a queen
        * "e1g1": the king castles king side
        """
        if len(uci) not in (4, 5):
            raise InvalidSquareError(f"Cannot interpret {uci!r} as a UCI move.")
        move = cls(Square.from_algebraic(uci[:2]), Square.from_algebraic(uci[2:4]))
        if len(uci) == 5:
            if uci[4].lower() not in FEN_TO_PIECE:
                raise InvalidSquareError(f"Unknown promotion piece in {uci!r}.")
            move = cls(move.source, move.target, FEN_TO_PIECE[uci[4].lower()])
        return move

    def to_uci(self) -> str:
        piece_char = PIECE_TO_FEN[self.promote_to] if self.promote_to else ""
        return f"{self.source.to_algebraic()}{self.target.to_algebraic()}{piece_char}"


# --- PAWN ORIENTATION ---
def pawn_direction(color: Color) -> int:
    """White pawns walk up the board (towards row 0), black pawns walk down."""
    return -1 if color == Color.WHITE else 1


def pawn_home_row(color: Color) -> int:
    return 6 if color == Color.WHITE else 1


def promotion_row(color: Color) -> int:
    return 0 if color == Color.WHITE else 7


def back_row(color: Color) -> int:
    """Row the king and rooks start on."""
    return 7 if color == Color.WHITE else 0


# --- SHAPES ---
def deltas(source: Square, target: Square) -> tuple[int, int]:
    return target.row - source.row, target.col - source.col


def is_straight_line(source: Square, target: Square) -> bool:
    return source != target and (source.row == target.row or source.col == target.col)


def is_diagonal_line(source: Square, target: Square) -> bool:
    d_row, d_col = deltas(source, target)
    return d_row != 0 and abs(d_row) == abs(d_col)


def is_knight_jump(source: Square, target: Square) -> bool:
    d_row, d_col = deltas(source, target)
    return {abs(d_row), abs(d_col)} == {1, 2}


def is_king_step(source: Square, target: Square) -> bool:
    d_row, d_col = deltas(source, target)
    return source != target and abs(d_row) <= 1 and abs(d_col) <= 1


def is_pawn_diagonal_step(source: Square, target: Square, color: Color) -> bool:
    """One row forward (for that color) and one file sideways: the squares a pawn attacks."""
    d_row, d_col = deltas(source, target)
    return d_row == pawn_direction(color) and abs(d_col) == 1


# --- RAYS ---
def squares_between(source: Square, target: Square) -> list[Square]:
    """
    The squares strictly between two squares on a shared rank, file or diagonal.

    Raises ValueError when the squares are not aligned: asking for the path between them means the caller has a bug.
    """
    if not (is_straight_line(source, target) or is_diagonal_line(source, target)):
        raise ValueError(
            f"squares_between requires aligned squares. \n from: {source}\n to: {target}"
        )

    d_row, d_col = deltas(source, target)
    step: Vector = (_sign(d_row), _sign(d_col))
    squares_found: list[Square] = []
    square = source.offset(*step)
    while square != target:
        squares_found.append(square)
        square = square.offset(*step)
    return squares_found


def is_path_clear(board: Board, source: Square, target: Square) -> bool:
    """Unobstructed strictly between both squares. Whatever stands on the target does not block arriving there."""
    return all(board.piece_at(square) is None for square in squares_between(source, target))


def can_slide_straight(board: Board, source: Square, target: Square) -> bool:
    """Rook (and half of the queen) movement"""
    return is_straight_line(source, target) and is_path_clear(board, source, target)


def can_slide_diagonal(board: Board, source: Square, target: Square) -> bool:
    """Bishop (and the other half of the queen) movement"""
    return is_diagonal_line(source, target) and is_path_clear(board, source, target)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)
