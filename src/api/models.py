"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import CastlingSide, Color, GameResult, Status
from src.rules.fen import is_valid_fen
from src.rules.pieces import FEN_TO_PIECE
from src.rules.square import FILES


def _is_algebraic_notation(value: str) -> bool:
    if len(value) != 2:
        return False
    return value[0].lower() in FILES and value[1] in "12345678"


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    starting_fen: Optional[str] = None

    @field_validator("starting_fen")
    @classmethod
    def validate_starting_fen(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        value = value.strip()
        if not is_valid_fen(value):
            raise InvalidRequestError(f"Cannot interpret {value!r} as a FEN string.")
        return value


class GetGameRequest(BaseModel):
    game_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not _is_algebraic_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            )
        return value.lower()


class PieceMoveRequest(BaseModel):
    """'Knight to f3'. `choice` picks one of the listed candidates (1-based) when more than one piece fits."""

    game_id: UUID
    piece: str
    to_square: str
    choice: Optional[int] = None

    @field_validator("piece")
    @classmethod
    def validate_piece(cls, value: str) -> str:
        if value.lower() not in FEN_TO_PIECE:
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a piece letter (one of pnbrqk)."
            )
        return value

    @field_validator("to_square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not _is_algebraic_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            )
        return value.lower()

    @field_validator("choice")
    @classmethod
    def validate_choice(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            raise InvalidRequestError("Choices are numbered from 1.")
        return value


class CastleRequest(BaseModel):
    game_id: UUID
    side: CastlingSide


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    fen_state: str
    starting_state: str
    move_history: list[str]
    status: Status
    color_to_move: Color
    in_check: bool = False
    result: Optional[GameResult] = None
    last_move: Optional[str] = None


class LegalMovesResponse(BaseModel):
    game_id: UUID
    color: Color
    legal_moves: list[str]
