"""Check, checkmate and stalemate detection."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

from src.core.shared_types import Color, GameResult
from src.rules.attacks import is_square_under_attack
from src.rules.board import Board
from src.rules.square import all_squares
from src.rules.validation import validate_move


class GameEndReason(StrEnum):
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


@dataclass(frozen=True)
class GameEnd:
    is_over: bool
    result: Optional[GameResult] = None
    reason: Optional[GameEndReason] = None


def is_in_check(board: Board, color: Color) -> bool:
    """Is the king of `color` attacked? A side without a king is never in check."""
    king_square = board.king_square(color)
    if king_square is None:
        return False
    return is_square_under_attack(board, king_square, color.opponent)


def has_legal_moves(board: Board, color: Color) -> bool:
    """
    Try every own piece against every square of the board, stop at the first legal move.

    NOTE: castling is left out of the scan. Whenever castling is legal, the single king step towards the rook is too,
    so it can never be the only legal move.
    """
    for source in board.squares_of(color):
        for target in all_squares():
            if validate_move(board, source, target, color).valid:
                return True
    return False


def is_checkmate(board: Board, color: Color) -> bool:
    return is_in_check(board, color) and not has_legal_moves(board, color)


def is_stalemate(board: Board, color: Color) -> bool:
    return not is_in_check(board, color) and not has_legal_moves(board, color)


def check_game_end(board: Board, current_player: Color) -> GameEnd:
    """
    Game over from the point of view of the player about to move.

    Only checkmate and stalemate end the game here. Other draws are not evaluated.
    """
    in_check = is_in_check(board, current_player)
    if has_legal_moves(board, current_player):
        return GameEnd(is_over=False)

    if in_check:
        return GameEnd(
            is_over=True,
            result=GameResult.win_for(current_player.opponent),
            reason=GameEndReason.CHECKMATE,
        )
    return GameEnd(
        is_over=True, result=GameResult.DRAW, reason=GameEndReason.STALEMATE
    )
