"""The Board holds the position (in chess: the configuration of pieces on the board). No legality knowledge lives here."""

from copy import deepcopy
from dataclasses import dataclass
from typing import Optional, Self

from src.core.shared_types import Color, PieceType
from src.rules.pieces import Piece
from src.rules.square import BOARD_SIZE, Square, all_squares

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_PLACEMENT = "/".join(["8"] * BOARD_SIZE)

Grid = list[list[Optional[Piece]]]


@dataclass
class Board:
    grid: Grid

    @classmethod
    def empty(cls) -> Self:
        return cls([[None] * BOARD_SIZE for _ in range(BOARD_SIZE)])

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_PLACEMENT)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board from the placement field of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (row 0), starting with the rook on a8
        * pawns cover the 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank (row 7) holds the white pieces.

        NOTE: expects a placement that already passed `is_valid_placement()`.
        """
        board = cls.empty()
        for row, fen_one_rank in enumerate(fen_str.split("/")):
            col = 0
            for character in fen_one_rank:
                if character.isdigit():
                    # A number denotes the amount of empty squares after each other
                    col += int(character)
                else:
                    board.grid[row][col] = Piece.from_fen(character)
                    col += 1
        return board

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string, 8th rank first."""
        return "/".join(self._row_to_fen(row) for row in self.grid)

    @staticmethod
    def _row_to_fen(row: list[Optional[Piece]]) -> str:
        fen_characters: list[str] = []
        empty_count = 0
        for piece in row:
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    # -- QUERIES --
    def piece_at(self, square: Square) -> Optional[Piece]:
        """Empty (None) for squares off the board, so scanning code does not have to bounds-check."""
        if not square.is_within_bounds():
            return None
        return self.grid[square.row][square.col]

    def is_own_piece(self, square: Square, color: Color) -> bool:
        piece = self.piece_at(square)
        return piece is not None and piece.color == color

    def is_empty(self, square: Square) -> bool:
        return self.piece_at(square) is None

    def squares_of(self, color: Color) -> list[Square]:
        return [square for square in all_squares() if self.is_own_piece(square, color)]

    def king_square(self, color: Color) -> Optional[Square]:
        """None when the color has no king (only in hand-built positions)."""
        king = Piece(PieceType.KING, color)
        return next(
            (square for square in all_squares() if self.piece_at(square) == king), None
        )

    def copy(self) -> Self:
        """Fully independent copy. Hypothetical moves are always tried on one of these."""
        return deepcopy(self)

    # -- MUTATIONS (only the executor / castling call these, on boards they own) --
    def place_piece(self, piece: Optional[Piece], square: Square) -> None:
        self.grid[square.row][square.col] = piece

    def remove_piece(self, square: Square) -> Optional[Piece]:
        piece = self.piece_at(square)
        self.grid[square.row][square.col] = None
        return piece

    def relocate(self, source: Square, target: Square) -> Optional[Piece]:
        """Raw relocation, no rules applied. Returns whatever stood on the target."""
        captured = self.piece_at(target)
        self.place_piece(self.remove_piece(source), target)
        return captured
