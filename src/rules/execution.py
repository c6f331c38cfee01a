"""Raw move execution. Callers validate first: nothing here checks legality."""

import logging
from dataclasses import dataclass
from typing import Optional

from src.core.exceptions import MissingPieceError
from src.core.shared_types import PieceType
from src.rules.board import Board
from src.rules.moves import promotion_row
from src.rules.pieces import Piece
from src.rules.square import Square

logger = logging.getLogger(__name__)


@dataclass
class ExecutedMove:
    updated_board: Board
    captured_piece: Optional[Piece]
    promoted: bool = False


def execute_move(board: Board, source: Square, target: Square) -> ExecutedMove:
    """
    Relocate the piece on `source` to `target` on a copy of the board.
    ----

    * A pawn reaching the last rank always becomes a queen.
    * Does NOT move the rook when castling (see `execute_castling`), and does not remove en passant victims.
    """
    piece = board.piece_at(source)
    if piece is None:
        logger.error("execute_move called without a piece on %s", source)
        raise MissingPieceError(f"No piece at source square {source}")

    updated_board = board.copy()
    captured_piece = updated_board.relocate(source, target)

    promoted = piece.kind == PieceType.PAWN and target.row == promotion_row(piece.color)
    if promoted:
        updated_board.place_piece(piece.promoted(PieceType.QUEEN), target)

    return ExecutedMove(updated_board, captured_piece, promoted)
