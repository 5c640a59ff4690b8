"""
Everything that makes up the state of a single game: the board, the players (with their hands) and whose turn it is.

Rules that only depend on this state live here as well: finding the winner, applying a replacement and (re)dealing hands.
"""

import logging
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Optional, Self

from src.boop.board import Gameboard
from src.boop.pieces import Formation, Piece
from src.boop.providers import MoveProvider, Placement
from src.core.config import get_settings
from src.core.exceptions import GameStateError, ProviderUnavailableError
from src.core.models import GameModel, PlayerModel
from src.core.shared_types import Phase

logger = logging.getLogger(__name__)


@dataclass
class Player:
    id: str
    name: str
    color: Optional[str] = None
    hand: list[Piece] = field(default_factory=list)
    # None for players reconstructed from a snapshot: they cannot make decisions
    provider: Optional[MoveProvider] = field(default=None, compare=False, repr=False)

    @classmethod
    def from_model(cls, model: PlayerModel) -> Self:
        return cls(
            id=model.id,
            name=model.name,
            color=model.color,
            hand=[Piece.from_model(piece) for piece in model.hand],
        )

    def to_model(self) -> PlayerModel:
        return PlayerModel(
            id=self.id,
            name=self.name,
            color=self.color,
            hand=[piece.to_model() for piece in self.hand],
        )

    def held_piece(self, piece_id: str) -> Optional[Piece]:
        return next((piece for piece in self.hand if piece.id == piece_id), None)

    def remove_from_hand(self, piece_id: str) -> None:
        self.hand = [piece for piece in self.hand if piece.id != piece_id]

    def request_placement(self, state: GameModel) -> Placement:
        return self._decision_source().supply_placement(state, self.id)

    def request_replacement_choice(self, candidates: list[Formation]) -> str:
        return self._decision_source().supply_replacement_choice(candidates)

    def _decision_source(self) -> MoveProvider:
        if self.provider is None:
            raise ProviderUnavailableError(
                f"Player {self.name!r} has no move provider (reconstructed from a snapshot?)"
            )
        return self.provider


@dataclass
class GameState:
    phase: Phase
    board: Gameboard
    current_player_index: int = 0
    players: list[Player] = field(default_factory=list)

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Reconstruct a state from its snapshot. Players come back without a move provider."""
        if model.phase not in [phase.value for phase in Phase]:
            raise GameStateError(
                f"Invalid phase: {model.phase!r}. \nPick one from {','.join(phase.value for phase in Phase)}"
            )
        return cls(
            phase=Phase(model.phase),
            board=Gameboard.from_model(model.board),
            current_player_index=model.current_player_index,
            players=[Player.from_model(player) for player in model.players],
        )

    def to_model(self) -> GameModel:
        return GameModel(
            phase=self.phase.value,
            players=[player.to_model() for player in self.players],
            board=self.board.to_model(),
            current_player_index=self.current_player_index,
        )

    def clone(self) -> Self:
        """Detached copy, good for display or as a basis for simulation (no move providers)."""
        return type(self).from_model(self.to_model())

    def copy_with_providers(self) -> Self:
        """Deep copy of board and hands. Providers are shared, not copied (they may hold sockets, RNGs, ...)."""
        memo = {
            id(player.provider): player.provider
            for player in self.players
            if player.provider is not None
        }
        return deepcopy(self, memo)

    def player_by_id(self, player_id: str) -> Optional[Player]:
        return next((player for player in self.players if player.id == player_id), None)

    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    def next_player(self) -> Player:
        return self.players[(self.current_player_index + 1) % len(self.players)]

    def winning_player(self) -> Optional[Player]:
        """
        Owner of the first formation made of three large pieces (if any).

        NOTE does not care who made the last move: pushing an opponent's pieces into a winning line makes the opponent win.
        """
        for formation in self.board.formations():
            if formation.is_triple() and formation.is_all_large():
                return self.player_by_id(formation.owner)
        return None

    def apply_replacement(self, formation: Formation) -> None:
        """
        Take the pieces of the formation off the board and give them back to their owner.
        ---

        Pieces of a triple get promoted (small -> large; large stays large).
        A single-piece candidate (forced when a hand ran empty) returns the piece as it is.
        """
        owner = self.player_by_id(formation.owner)
        if owner is None:
            raise GameStateError(f"Unknown owner {formation.owner!r} for replacement.")

        for located in formation.pieces:
            self.board.clear_piece(located.position)
            piece = located.to_piece()
            if formation.is_triple():
                piece.promote()
            owner.hand.append(piece)
        logger.debug(
            "Replaced %d piece(s) of %s back into hand", len(formation.pieces), owner.name
        )

    def goto_initial_state(self, hand_size: Optional[int] = None) -> None:
        """Clear the board, deal every player a fresh hand of small pieces. Works for a first start and a restart."""
        hand_size = hand_size if hand_size is not None else get_settings().hand_size
        self.board.reset()
        self.phase = Phase.CHOOSING_PLACE
        for player in self.players:
            player.hand = [Piece.new(player.id) for _ in range(hand_size)]

    def advance_turn(self) -> None:
        self.current_player_index = (self.current_player_index + 1) % len(self.players)
