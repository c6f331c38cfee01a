"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from uuid import UUID

from src.api.models import (
    CastleRequest,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    PieceMoveRequest,
)
from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.db.repository import GameRepository
from src.rules.game import Game
from src.rules.square import Square

logger = logging.getLogger(__name__)


class GameService:
    """Orchestration of layers for chess game."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """Start a game from the standard position, or from the requested FEN."""
        new_game = Game.new(request.starting_fen)
        _, game_id = self.repo.create_game(new_game.to_model())
        logger.info("Created game %s from %r", game_id, new_game.starting_fen)
        return self._create_game_response(game_id, new_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game = self._load_game(request.game_id)
        return self._create_game_response(request.game_id, game)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Legal moves (UCI) for whoever is to move."""
        game = self._load_game(request.game_id)
        return LegalMovesResponse(
            game_id=request.game_id,
            color=game.color_to_move,
            legal_moves=game.legal_moves(),
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Move attempt with explicit source and target squares."""
        game = self._load_game(request.game_id)
        game.make_move(
            Square.from_algebraic(request.from_square),
            Square.from_algebraic(request.to_square),
        )
        return self._store(request.game_id, game)

    def make_piece_move(self, request: PieceMoveRequest) -> GameResponse:
        """Move attempt naming only the piece type and the target square."""
        game = self._load_game(request.game_id)
        game.make_piece_move(
            request.piece, Square.from_algebraic(request.to_square), request.choice
        )
        return self._store(request.game_id, game)

    def castle(self, request: CastleRequest) -> GameResponse:
        game = self._load_game(request.game_id)
        game.castle(request.side)
        return self._store(request.game_id, game)

    def list_games(self) -> list[GameResponse]:
        """Show all recorded games."""
        return [
            self._create_game_response(game_id, Game.from_model(model))
            for game_id, model in self.repo.list_games()
        ]

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with {request.game_id=} not found.")
        logger.info("Deleted game %s", request.game_id)

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        """Convert a Game into a GameResponse (for game with given ID.)"""
        last_move = game.state.last_move
        return GameResponse(
            game_id=game_id,
            fen_state=game.fen,
            starting_state=game.starting_fen,
            move_history=[record.to_uci() for record in game.state.move_history],
            status=game.status,
            color_to_move=game.color_to_move,
            in_check=game.in_check,
            result=game.result,
            last_move=last_move.notation if last_move else None,
        )

    def _store(self, game_id: UUID, game: Game) -> GameResponse:
        if self.repo.update_game(game_id, game.to_model()) is None:
            raise RepositoryError(f"Game with {game_id=} could not be updated.")
        return self._create_game_response(game_id, game)

    def _load_game(self, game_id: UUID) -> Game:
        """Rebuild the Game from its stored record."""
        return Game.from_model(self._fetch_game(game_id))

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            logger.warning("Game %s not found", game_id)
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
