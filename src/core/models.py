"""
Boundary layer data model(s).

These objects are used to communicate with the Service.
Both the domain layer (Game) and the db layer (repository) convert to/from the model defined here,
so neither has to know the other's representation.
"""

from dataclasses import dataclass, field


@dataclass
class GameModel:
    """Transport-safe representation of a chess game used between Service, DB, and Game layers.

    The moves are enough to rebuild everything else (history, captures, rights) by replaying them
    from the starting FEN. The current FEN is stored as well so it can be read without replaying.
    """

    starting_fen: str
    current_fen: str
    moves_uci: list[str] = field(default_factory=list)
    status: str = "in progress"
