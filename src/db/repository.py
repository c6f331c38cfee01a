"""
Persistence boundary. The service only knows this Protocol, SQLGameRepository is the implementation in use.

A stored game is a GameModel: the FEN it started from plus the UCI moves played since.
The service rebuilds the Game by replaying them, so an implementation only ever stores and returns models.
"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store a new game. Returns the stored model and the id it was given."""
        ...

    def get_game(self, game_id: UUID) -> GameModel | None:
        ...

    def list_games(self) -> list[tuple[UUID, GameModel]]:
        """Every stored game, oldest first."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite position, moves and status. None when there is no such game."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Returns what was removed, None if there was nothing to remove."""
        ...
