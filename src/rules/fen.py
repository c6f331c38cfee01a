"""
FEN encoding / decoding of a GameState.
----

FEN, or Forsyth-Edwards Notation, is a standard notation for describing a particular board position of a chess game.
The purpose of FEN is to provide all the necessary information to restart a game from a particular position.

<board position> <active color> <castling rights> <en passant square> <half move clock> <full move number>

* The board position is described in Board.from_fen()
* The active color is either "w" or "b"
* Castling rights are "K"/"Q" for white king/queen side, "k"/"q" for black. "-" when all are revoked.
* The en passant square, or "-".
* The half move clock counts the moves since the last pawn move or capture.
* The full move number starts at 1 and increments after every move black makes.

ex) The standard starting position:
rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1
"""

from string import ascii_lowercase

from src.core.exceptions import InvalidFENError
from src.core.shared_types import Color
from src.rules.board import Board
from src.rules.castling import CastlingRights
from src.rules.pieces import FEN_TO_PIECE
from src.rules.square import BOARD_SIZE, Square
from src.rules.state import GameState

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
CASTLING_ORDER = "KQkq"


def board_to_fen(state: GameState) -> str:
    """Six space separated fields. The move counters are clamped so the string is always readable by other tools."""
    placement = state.board.to_fen()
    active_color = "w" if state.current_player == Color.WHITE else "b"
    castling_str = state.castling_rights.to_fen()
    en_passant_algebraic = (
        state.en_passant_target.to_algebraic()
        if state.en_passant_target is not None
        else "-"
    )
    half_move_clock = max(state.halfmove_clock, 0)
    full_move_number = max(state.fullmove_number, 1)
    return f"{placement} {active_color} {castling_str} {en_passant_algebraic} {half_move_clock} {full_move_number}"


def parse_fen(fen: str) -> GameState:
    """Build a fresh GameState (empty history, no captures) from a FEN string."""
    if not is_valid_fen(fen):
        raise InvalidFENError(f"Cannot interpret supplied string as FEN: {fen}")

    (
        placement,
        active_color,
        castling_str,
        en_passant_algebraic,
        half_move_clock,
        full_move_number,
    ) = fen.split(" ")

    return GameState(
        board=Board.from_fen(placement),
        current_player=Color.WHITE if active_color == "w" else Color.BLACK,
        castling_rights=CastlingRights.from_fen(castling_str),
        en_passant_target=(
            Square.from_algebraic(en_passant_algebraic)
            if en_passant_algebraic != "-"
            else None
        ),
        halfmove_clock=int(half_move_clock),
        fullmove_number=int(full_move_number),
    )


# --- VALIDATION ---
def is_valid_fen(fen: str) -> bool:
    """
    Check if given string follows proper FEN notation.
    """
    parts = fen.split(" ")
    if len(parts) != 6:
        return False

    placement, color, castling, en_passant, half_moves, full_moves = parts
    return (
        is_valid_placement(placement)
        and is_valid_color_code(color)
        and is_valid_castling_rights(castling)
        and is_valid_en_passant(en_passant)
        and is_valid_move_counter(half_moves)
        and is_valid_move_counter(full_moves)
    )


def is_valid_placement(placement: str) -> bool:
    """Only check the part of the FEN encoding for the board position."""
    rank_fens = placement.split("/")
    if len(rank_fens) != BOARD_SIZE:
        return False

    for rank_fen in rank_fens:
        file_count = 0
        for character in rank_fen:
            if character in "12345678":
                file_count += int(character)
            elif character.lower() in FEN_TO_PIECE:
                file_count += 1
            else:
                return False

        # make sure you are creating a correctly sized board
        if file_count != BOARD_SIZE:
            return False
    return True


def is_valid_color_code(color: str) -> bool:
    return color in {"w", "b"}


def is_valid_castling_rights(castling: str) -> bool:
    """Either "-", or a non-empty subsequence of "KQkq" (order matters, no repeats)."""
    if castling == "-":
        return True
    if not castling:
        return False
    remaining = iter(CASTLING_ORDER)
    return all(character in remaining for character in castling)


def is_valid_en_passant(en_passant: str) -> bool:
    return (en_passant == "-") or is_valid_square(en_passant)


def is_valid_square(square: str) -> bool:
    """A letter for the file + a number for the rank"""
    if len(square) != 2:
        return False
    file_char, rank_char = square[0], square[1]
    if file_char not in ascii_lowercase[:BOARD_SIZE]:
        return False
    return rank_char in "12345678"


def is_valid_move_counter(counter: str) -> bool:
    """Non-negative integer, ASCII digits only."""
    return counter.isascii() and counter.isdigit()
