"""Defines the chess pieces: an explicit (kind, color) pair. Letter case only matters at the FEN boundary."""

from dataclasses import dataclass
from typing import Self

from src.core.shared_types import Color, PieceType

FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}


@dataclass(frozen=True)
class Piece:
    kind: PieceType
    color: Color

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_fen(self) -> str:
        letter = PIECE_TO_FEN[self.kind]
        return letter.upper() if self.color == Color.WHITE else letter

    def promoted(self, new_kind: PieceType) -> Self:
        return type(self)(new_kind, self.color)


def piece_type_from_letter(letter: str) -> PieceType:
    """'N', 'n' -> knight. Raises KeyError for anything that is not a FEN piece letter."""
    return FEN_TO_PIECE[letter.lower()]
