"""
The Game class is the entrypoint into the domain layer for the service layer.
It runs a turn end to end:

1. validate the requested move for the side to move
2. move the piece(s): a castle moves king and rook, anything else goes through the executor
3. update castling rights, move counters, captured pieces and the move history
4. check whether the opponent is now mated or stalemated
"""

import logging
from dataclasses import dataclass
from typing import Optional, Self, Union

from src.core.exceptions import (
    AmbiguousMoveError,
    GameStateError,
    IllegalMoveError,
    InvalidRequestError,
)
from src.core.models import GameModel
from src.core.shared_types import CastlingSide, Color, GameResult, PieceType, Status
from src.rules.castling import (
    CASTLING_RULES,
    castling_side_for,
    execute_castling,
    update_castling_rights,
)
from src.rules.disambiguation import (
    PotentialMove,
    choose_candidate,
    find_possible_moves,
)
from src.rules.execution import execute_move
from src.rules.fen import STARTING_FEN, board_to_fen, parse_fen
from src.rules.game_state import GameEndReason, check_game_end, is_in_check
from src.rules.moves import Move
from src.rules.pieces import PIECE_TO_FEN, Piece
from src.rules.square import Square
from src.rules.state import GameState, MoveRecord
from src.rules.validation import MoveError, legal_targets, validate_move

logger = logging.getLogger(__name__)

CASTLING_NOTATION: dict[CastlingSide, str] = {
    CastlingSide.KINGSIDE: "O-O",
    CastlingSide.QUEENSIDE: "O-O-O",
}


def move_notation(
    piece: Piece,
    source: Square,
    target: Square,
    captured: Optional[Piece],
    promoted: bool,
    castling_side: Optional[CastlingSide],
    is_check: bool,
    is_mate: bool,
) -> str:
    """
    Short algebraic notation, without file/rank disambiguation.

    ex) "e4", "exd5", "Nf3", "Bxc6+", "e8=Q", "O-O", "Qh4#"
    """
    if castling_side is not None:
        notation = CASTLING_NOTATION[castling_side]
    elif piece.kind == PieceType.PAWN:
        notation = f"{source.file}x" if captured else ""
        notation += target.to_algebraic()
        if promoted:
            notation += "=Q"
    else:
        capture_mark = "x" if captured else ""
        notation = f"{PIECE_TO_FEN[piece.kind].upper()}{capture_mark}{target.to_algebraic()}"

    if is_mate:
        return notation + "#"
    if is_check:
        return notation + "+"
    return notation


@dataclass
class Game:
    state: GameState
    starting_fen: str = STARTING_FEN
    status: Status = Status.IN_PROGRESS
    result: Optional[GameResult] = None

    # --- CREATION ---
    @classmethod
    def new(cls, starting_fen: Optional[str] = None) -> Self:
        """Standard starting position, unless a FEN is supplied."""
        fen = starting_fen or STARTING_FEN
        game = cls(state=parse_fen(fen), starting_fen=fen)
        # A custom position can already be over.
        game._update_status()
        return game

    @classmethod
    def from_fen(cls, fen: str) -> Self:
        return cls.new(fen)

    @classmethod
    def replay(cls, starting_fen: str, moves_uci: list[str]) -> Self:
        """Rebuild a game (history, captures, rights and all) by playing the recorded moves again."""
        game = cls.new(starting_fen)
        for uci in moves_uci:
            game.make_uci_move(uci)
        return game

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        game = cls.replay(model.starting_fen, model.moves_uci)
        if game.fen != model.current_fen:
            raise GameStateError(
                f"Stored position {model.current_fen!r} does not match the replayed moves ({game.fen!r})."
            )
        return game

    def to_model(self) -> GameModel:
        return GameModel(
            starting_fen=self.starting_fen,
            current_fen=self.fen,
            moves_uci=[record.to_uci() for record in self.state.move_history],
            status=self.status.value,
        )

    # --- QUERIES ---
    @property
    def fen(self) -> str:
        return board_to_fen(self.state)

    @property
    def color_to_move(self) -> Color:
        return self.state.current_player

    @property
    def is_over(self) -> bool:
        return self.status != Status.IN_PROGRESS

    @property
    def in_check(self) -> bool:
        return is_in_check(self.state.board, self.state.current_player)

    def legal_moves(self) -> list[str]:
        """UCI encoded legal moves for the side to move. Promotions carry the 'q' suffix."""
        if self.is_over:
            return []

        color = self.state.current_player
        moves: list[str] = []
        for source in self.state.board.squares_of(color):
            for target in legal_targets(
                self.state.board, source, color, self.state.castling_rights
            ):
                moves.append(self._as_uci(source, target))
        return moves

    def candidates(
        self, piece_letter: Union[str, PieceType], target: Square
    ) -> list[PotentialMove]:
        """Pieces that could go to `target` AND may legally do so right now."""
        color = self.state.current_player
        try:
            possible = find_possible_moves(self.state.board, color, piece_letter, target)
        except KeyError:
            raise InvalidRequestError(f"Unknown piece letter: {piece_letter!r}") from None

        return [
            candidate
            for candidate in possible
            if validate_move(
                self.state.board,
                candidate.source,
                target,
                color,
                self.state.castling_rights,
            ).valid
        ]

    # --- ACTIONS ---
    def make_move(self, source: Square, target: Square) -> MoveRecord:
        """
        Attempt to make a move for the side to move.
        -----

        Raises IllegalMoveError (with the validation outcome as `reason`) and leaves the game untouched if refused.
        """
        self._assert_in_progress()

        color = self.state.current_player
        board = self.state.board
        validation = validate_move(
            board, source, target, color, self.state.castling_rights
        )
        if not validation.valid:
            logger.info(
                "Rejected move %s -> %s for %s: %s",
                source,
                target,
                color,
                validation.error,
            )
            raise IllegalMoveError(
                f"Move not allowed: {validation.error}", reason=validation.error
            )

        piece = board.piece_at(source)
        # for the type checker: validation guarantees a piece of our own color
        assert piece is not None

        castling_side = (
            castling_side_for(source, target) if piece.kind == PieceType.KING else None
        )
        if castling_side is not None:
            updated_board = execute_castling(board, color, castling_side).updated_board
            captured, promoted = None, False
        else:
            executed = execute_move(board, source, target)
            updated_board = executed.updated_board
            captured, promoted = executed.captured_piece, executed.promoted

        # rights are decided on the board as it was before the move
        self.state.castling_rights = update_castling_rights(
            board, source, target, color, self.state.castling_rights
        )
        self.state.board = updated_board
        self._update_counters(piece, captured, color)
        if captured is not None:
            self.state.captures_of(color).append(captured)
        self.state.en_passant_target = None
        self.state.current_player = color.opponent

        game_end = self._update_status()
        record = MoveRecord(
            source=source,
            target=target,
            piece=piece,
            notation=move_notation(
                piece,
                source,
                target,
                captured,
                promoted,
                castling_side,
                is_check=validation.delivers_check,
                is_mate=game_end == GameEndReason.CHECKMATE,
            ),
            captured=captured,
            delivers_check=validation.delivers_check,
            promoted=promoted,
            castling_side=castling_side,
        )
        self.state.move_history.append(record)
        return record

    def make_uci_move(self, uci: str) -> MoveRecord:
        move = Move.from_uci(uci)
        if move.promote_to not in (None, PieceType.QUEEN):
            raise IllegalMoveError(
                f"Pawns always promote to a queen, cannot play {uci!r}",
                reason=MoveError.ILLEGAL_PATTERN,
            )
        return self.make_move(move.source, move.target)

    def make_piece_move(
        self,
        piece_letter: Union[str, PieceType],
        target: Square,
        choice: Optional[int] = None,
    ) -> MoveRecord:
        """
        "Knight to f3": find the piece that is meant and move it.
        ----

        * exactly one legal candidate --> play it
        * several, and no `choice` --> AmbiguousMoveError listing them (1-based, in board order)
        * several, with `choice` --> play the chosen one
        * none --> IllegalMoveError
        """
        self._assert_in_progress()
        options = self.candidates(piece_letter, target)

        if not options:
            raise IllegalMoveError(
                f"No {piece_letter} can move to {target.to_algebraic()}",
                reason=MoveError.ILLEGAL_PATTERN,
            )

        if choice is not None:
            chosen = choose_candidate(options, choice)
        elif len(options) == 1:
            chosen = options[0]
        else:
            raise AmbiguousMoveError(
                f"{len(options)} pieces can move to {target.to_algebraic()}",
                candidates=[option.source.to_algebraic() for option in options],
            )
        return self.make_move(chosen.source, target)

    def castle(self, side: CastlingSide) -> MoveRecord:
        squares = CASTLING_RULES[(self.state.current_player, side)]
        return self.make_move(squares.king_from, squares.king_to)

    # -- PRIVATE HELPERS ---
    def _assert_in_progress(self) -> None:
        if self.is_over:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

    def _as_uci(self, source: Square, target: Square) -> str:
        piece = self.state.board.piece_at(source)
        promotes = (
            piece is not None
            and piece.kind == PieceType.PAWN
            and target.row in (0, 7)
        )
        return Move(source, target, PieceType.QUEEN if promotes else None).to_uci()

    def _update_counters(
        self, piece: Piece, captured: Optional[Piece], color: Color
    ) -> None:
        if piece.kind == PieceType.PAWN or captured is not None:
            self.state.halfmove_clock = 0
        else:
            self.state.halfmove_clock += 1

        if color == Color.BLACK:
            self.state.fullmove_number += 1

    def _update_status(self) -> Optional[GameEndReason]:
        """Evaluate the position for the side to move. Returns the reason the game ended, if it did."""
        game_end = check_game_end(self.state.board, self.state.current_player)
        if not game_end.is_over:
            return None

        self.status = (
            Status.CHECKMATE
            if game_end.reason == GameEndReason.CHECKMATE
            else Status.STALEMATE
        )
        self.result = game_end.result
        logger.info("Game over by %s: %s", game_end.reason, game_end.result)
        return game_end.reason
