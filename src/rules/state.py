"""The aggregate state of one game: everything FEN encodes, plus history and captures."""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.shared_types import CastlingSide, Color
from src.rules.board import Board
from src.rules.castling import CastlingRights
from src.rules.pieces import Piece
from src.rules.square import Square


@dataclass(frozen=True)
class MoveRecord:
    """One executed ply, as it goes into the move history."""

    source: Square
    target: Square
    piece: Piece
    notation: str
    captured: Optional[Piece] = None
    delivers_check: bool = False
    promoted: bool = False
    castling_side: Optional[CastlingSide] = None

    def to_uci(self) -> str:
        suffix = "q" if self.promoted else ""
        return f"{self.source.to_algebraic()}{self.target.to_algebraic()}{suffix}"


@dataclass
class GameState:
    board: Board
    current_player: Color = Color.WHITE
    castling_rights: CastlingRights = field(default_factory=CastlingRights)
    # Kept so a loaded FEN round-trips. Nothing in the engine plays en passant.
    en_passant_target: Optional[Square] = None
    halfmove_clock: int = 0
    fullmove_number: int = 1
    move_history: list[MoveRecord] = field(default_factory=list)
    captured_by_white: list[Piece] = field(default_factory=list)
    captured_by_black: list[Piece] = field(default_factory=list)

    @classmethod
    def new(cls) -> Self:
        """Standard starting position, white to move, all castling rights."""
        return cls(board=Board.starting_position())

    @property
    def last_move(self) -> Optional[MoveRecord]:
        return self.move_history[-1] if self.move_history else None

    def captures_of(self, color: Color) -> list[Piece]:
        return self.captured_by_white if color == Color.WHITE else self.captured_by_black
