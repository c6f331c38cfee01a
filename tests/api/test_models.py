from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError

from src.api.models import CastleRequest, CreateGameRequest, MoveRequest, PieceMoveRequest
from src.core.shared_types import CastlingSide


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - CreateGameRequest --
def test_valid_fen() -> None:
    """Test that CreateGameRequest accepts a valid FEN string."""
    valid_fen = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
    request = CreateGameRequest(starting_fen=valid_fen)
    assert request.starting_fen == valid_fen


def test_starting_fen_is_optional() -> None:
    """Should be able to not supply a starting FEN, and validator just returns None."""
    assert CreateGameRequest().starting_fen is None
    assert CreateGameRequest(starting_fen=None).starting_fen is None


@pytest.mark.parametrize(
    "invalid_fen",
    [
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0",  # only 5 space-separated values
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1 extra",  # too many space-separated values
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR z KQkq - 0 1",  # no such color
        " ".join(["mock"] * 6),
    ],
)
def test_invalid_fen(invalid_fen: str) -> None:
    """InvalidRequestError is a ValueError, pydantic reports it as a ValidationError."""
    with pytest.raises(ValidationError, match="FEN"):
        _ = CreateGameRequest(starting_fen=invalid_fen)


# -- Validation - MoveRequest --
def test_valid_square_names(mock_id: UUID) -> None:
    """Test that MoveRequest accepts correctly written squares in algebraic notation."""
    request = MoveRequest(game_id=mock_id, from_square="e2", to_square="E4")
    assert request.from_square == "e2"
    assert request.to_square == "e4"


@pytest.mark.parametrize(
    "square",
    [
        "nonsense",  # anything more than two characters.
        "11",  # First character is not a letter
        "aa",  # second character is not a number
        "i1",  # no i-file
        "a9",  # no 9th rank
    ],
)
def test_invalid_square(mock_id: UUID, square: str) -> None:
    """Test that an exception is raised when using invalid square name."""
    with pytest.raises(ValidationError):
        _ = MoveRequest(game_id=mock_id, from_square=square, to_square="e2")
    with pytest.raises(ValidationError):
        _ = MoveRequest(game_id=mock_id, from_square="e2", to_square=square)


# -- Validation - PieceMoveRequest --
def test_piece_move_request(mock_id: UUID) -> None:
    request = PieceMoveRequest(game_id=mock_id, piece="N", to_square="f3")
    assert request.choice is None


@pytest.mark.parametrize(
    "fields",
    [
        {"piece": "x", "to_square": "f3"},
        {"piece": "knight", "to_square": "f3"},
        {"piece": "N", "to_square": "f9"},
        {"piece": "N", "to_square": "f3", "choice": 0},
    ],
)
def test_invalid_piece_move_request(mock_id: UUID, fields: dict) -> None:
    with pytest.raises(ValidationError):
        _ = PieceMoveRequest(game_id=mock_id, **fields)


def test_castle_request(mock_id: UUID) -> None:
    assert CastleRequest(game_id=mock_id, side="kingside").side == CastlingSide.KINGSIDE
    with pytest.raises(ValidationError):
        _ = CastleRequest(game_id=mock_id, side="sideways")
