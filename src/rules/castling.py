"""
Castling rules
----

* Rights: four independent flags, encoded in FEN as "KQkq" (or "-" once all are revoked).
* Legality of a castle in the current position (`can_castle`).
* The actual two-piece relocation (`execute_castling`).
* Revoking rights after any move (`update_castling_rights`).
"""

from dataclasses import dataclass, replace
from typing import Optional, Self

from src.core.shared_types import CastlingSide, Color, PieceType
from src.rules.attacks import is_square_under_attack
from src.rules.board import Board
from src.rules.moves import Move, back_row, squares_between
from src.rules.pieces import Piece
from src.rules.square import Square

# FEN letters, also the order they are written in.
RIGHTS_LETTERS: dict[tuple[Color, CastlingSide], str] = {
    (Color.WHITE, CastlingSide.KINGSIDE): "K",
    (Color.WHITE, CastlingSide.QUEENSIDE): "Q",
    (Color.BLACK, CastlingSide.KINGSIDE): "k",
    (Color.BLACK, CastlingSide.QUEENSIDE): "q",
}


@dataclass(frozen=True)
class CastlingRights:
    white_kingside: bool = True
    white_queenside: bool = True
    black_kingside: bool = True
    black_queenside: bool = True

    @classmethod
    def none(cls) -> Self:
        return cls(False, False, False, False)

    @classmethod
    def from_fen(cls, castle_fen: str) -> Self:
        """parse the part of the FEN string that encodes castling rights"""
        return cls(
            **{
                _flag_name(color, side): letter in castle_fen
                for (color, side), letter in RIGHTS_LETTERS.items()
            }
        )

    def to_fen(self) -> str:
        castling_chars = "".join(
            letter
            for (color, side), letter in RIGHTS_LETTERS.items()
            if self.has(color, side)
        )
        return castling_chars or "-"

    def has(self, color: Color, side: CastlingSide) -> bool:
        return getattr(self, _flag_name(color, side))

    def has_any(self, color: Color) -> bool:
        return any(self.has(color, side) for side in CastlingSide)

    def revoke(self, color: Color, side: Optional[CastlingSide] = None) -> Self:
        """Drop one side, or both sides when `side` is None."""
        sides = [side] if side else list(CastlingSide)
        return replace(self, **{_flag_name(color, s): False for s in sides})

    def __str__(self) -> str:
        return self.to_fen()


def _flag_name(color: Color, side: CastlingSide) -> str:
    return f"{color.value}_{side.value}"


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @classmethod
    def for_side(cls, color: Color, side: CastlingSide) -> Self:
        row = back_row(color)
        if side == CastlingSide.KINGSIDE:
            return cls(Square(row, 4), Square(row, 6), Square(row, 7), Square(row, 5))
        return cls(Square(row, 4), Square(row, 2), Square(row, 0), Square(row, 3))

    def between(self) -> list[Square]:
        """Squares that must be empty: everything strictly between king and rook."""
        return squares_between(self.king_from, self.rook_from)

    def king_path(self) -> list[Square]:
        """Squares the king crosses, including where it lands. None of them may be attacked."""
        return squares_between(self.king_from, self.king_to) + [self.king_to]


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[tuple[Color, CastlingSide], CastlingSquares] = {
    (color, side): CastlingSquares.for_side(color, side)
    for color in Color
    for side in CastlingSide
}


@dataclass
class CastlingResult:
    updated_board: Board
    king_move: Move
    rook_move: Move


def castling_side_for(source: Square, target: Square) -> Optional[CastlingSide]:
    """A king moving two files along its row is asking to castle. Which side?"""
    if source.row != target.row or abs(target.col - source.col) != 2:
        return None
    return CastlingSide.KINGSIDE if target.col > source.col else CastlingSide.QUEENSIDE


def can_castle(
    board: Board, color: Color, side: CastlingSide, rights: CastlingRights
) -> bool:
    """
    You are allowed to castle if
    ---

    * the right for this side has not been revoked
    * king and rook still stand on their home squares
    * every square between them is empty
    * you are not currently in check (you cannot castle out of check)
    * no square the king crosses or lands on is attacked (checked on the current board)
    """
    if not rights.has(color, side):
        return False

    squares = CASTLING_RULES[(color, side)]
    if board.piece_at(squares.king_from) != Piece(PieceType.KING, color):
        return False
    if board.piece_at(squares.rook_from) != Piece(PieceType.ROOK, color):
        return False

    if any(not board.is_empty(square) for square in squares.between()):
        return False

    opponent = color.opponent
    if is_square_under_attack(board, squares.king_from, opponent):
        return False

    return not any(
        is_square_under_attack(board, square, opponent)
        for square in squares.king_path()
    )


def execute_castling(board: Board, color: Color, side: CastlingSide) -> CastlingResult:
    """Move both the King and the Rook on a copy. The board passed in is left alone."""
    squares = CASTLING_RULES[(color, side)]
    updated_board = board.copy()
    updated_board.relocate(squares.king_from, squares.king_to)
    updated_board.relocate(squares.rook_from, squares.rook_to)
    return CastlingResult(
        updated_board=updated_board,
        king_move=Move(squares.king_from, squares.king_to),
        rook_move=Move(squares.rook_from, squares.rook_to),
    )


def update_castling_rights(
    board: Board,
    source: Square,
    target: Square,
    color: Color,
    rights: CastlingRights,
) -> CastlingRights:
    """
    Rights after the move source -> target by `color`. Pass the board as it was BEFORE the move.
    ----

    1. Moving your king (castling included) --> revoke both of your rights
    2. Moving a rook away from its home square --> revoke that side
    3. Taking an opponent's rook standing on its home square --> revoke that side for the opponent

    NOTE: Taking a rook anywhere else leaves the opponent's rights as they are.
    """
    moving_piece = board.piece_at(source)
    if moving_piece is None:
        return rights

    if moving_piece.kind == PieceType.KING:
        rights = rights.revoke(color)

    if moving_piece.kind == PieceType.ROOK:
        for side in CastlingSide:
            if source == CASTLING_RULES[(color, side)].rook_from:
                rights = rights.revoke(color, side)

    opponent = color.opponent
    if board.piece_at(target) == Piece(PieceType.ROOK, opponent):
        for side in CastlingSide:
            if target == CASTLING_RULES[(opponent, side)].rook_from:
                rights = rights.revoke(opponent, side)

    return rights
