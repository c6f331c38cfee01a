"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.exceptions import InvalidSquareError

# Chess board is always 8x8.
BOARD_SIZE = 8
FILES = "abcdefgh"


@dataclass(frozen=True)
class Square:
    """
    Grid coordinates: row 0 is the 8th rank, row 7 the 1st rank. Column 0 is the a-file.

    Squares outside the board can be constructed (handy while walking rays); check with `is_within_bounds()`.
    """

    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' -> (0, 0), 'h1' -> (7, 7)"""
        if len(sq) != 2:
            raise InvalidSquareError(f"Cannot interpret {sq!r} as a square name.")

        file_char, rank_char = sq[0].lower(), sq[1]
        if file_char not in FILES or rank_char not in "123456789":
            raise InvalidSquareError(f"Cannot interpret {sq!r} as a square name.")

        rank = int(rank_char)
        if not 1 <= rank <= BOARD_SIZE:
            raise InvalidSquareError(f"Rank out of range in {sq!r}.")
        return cls(BOARD_SIZE - rank, FILES.index(file_char))

    def to_algebraic(self) -> str:
        if not self.is_within_bounds():
            raise InvalidSquareError(f"{self} is not on the board.")
        return f"{FILES[self.col]}{self.rank}"

    @property
    def rank(self) -> int:
        return BOARD_SIZE - self.row

    @property
    def file(self) -> str:
        return FILES[self.col]

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_SIZE) and (0 <= self.col < BOARD_SIZE)

    def offset(self, d_row: int, d_col: int) -> Square:
        return Square(self.row + d_row, self.col + d_col)


def all_squares() -> list[Square]:
    """Every square of the board, a8 first, h1 last (the order FEN uses)."""
    return [Square(row, col) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE)]
