"""
The BoopGame class is the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a round of the board game:
asking the current player where to place which piece, committing it, resolving replacements and passing the turn on.
"""

import logging
from typing import Optional

from src.boop.board import Gameboard
from src.boop.events import (
    EventListener,
    GameEvent,
    GameStarted,
    PiecePlaced,
    PlayerAdded,
    PlayerWon,
)
from src.boop.game_state import GameState, Player
from src.boop.pieces import Formation, LocatedPiece
from src.boop.position import Position
from src.boop.providers import Placement
from src.boop.simulator import Simulator
from src.core.config import get_settings
from src.core.exceptions import (
    GameStateError,
    InvalidPieceError,
    InvalidReplacementError,
    PlacementError,
)
from src.core.models import GameModel
from src.core.shared_types import MIN_PLAYERS, PLAYER_COLORS, Phase

logger = logging.getLogger(__name__)


class BoopGame:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    def __init__(
        self,
        game_id: str,
        width: Optional[int] = None,
        height: Optional[int] = None,
        hand_size: Optional[int] = None,
    ) -> None:
        settings = get_settings()
        self.id = game_id
        self.hand_size = hand_size if hand_size is not None else settings.hand_size
        board = Gameboard(
            width if width is not None else settings.board_width,
            height if height is not None else settings.board_height,
        )
        self._state = GameState(phase=Phase.NOT_STARTED, board=board)
        self._listeners: list[EventListener] = []

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    def snapshot(self) -> GameModel:
        return self._state.to_model()

    def add_event_listener(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    def add_player(self, player: Player) -> None:
        """Players join before the start. Colors are handed out in join order."""
        if self._state.phase != Phase.NOT_STARTED:
            raise GameStateError(
                f"Cannot join this game. Game is not accepting new players. phase: {self._state.phase}"
            )
        if len(self._state.players) >= len(PLAYER_COLORS):
            raise GameStateError(
                f"Cannot join this game. Maximum of {len(PLAYER_COLORS)} players reached."
            )
        if self._state.player_by_id(player.id) is not None:
            raise GameStateError(f"Player with id {player.id!r} already joined.")

        player.color = PLAYER_COLORS[len(self._state.players)]
        self._state.players.append(player)
        if player.provider is not None:
            player.provider.bind(player.id)
        logger.info("Game %s: player %s joined as %s", self.id, player.name, player.color)
        self._emit(PlayerAdded(player))

    def start(self) -> None:
        """
        First start, or a restart after the game is over (same players, fresh board and hands).
        """
        if self._state.phase == Phase.CHOOSING_PLACE:
            raise GameStateError("Game is already in progress.")
        if len(self._state.players) < MIN_PLAYERS:
            raise GameStateError(
                f"Not enough players: {len(self._state.players)} joined, {MIN_PLAYERS} needed."
            )
        self._state.goto_initial_state(self.hand_size)
        logger.info("Game %s started with %d players", self.id, len(self._state.players))
        self._emit(GameStarted())

    def play_round(self) -> bool:
        """
        Play a single round for the current player. Returns True if the game continues.
        -----

        1. ask the current player where to place which piece (may block until the player answers)
        2. validate and commit the placement (pushes included)
        3. winning line on the board? --> game over
        4. hand empty? --> player must take one of their own pieces back
        5. every player (starting with the current one) resolves at most one of the triples on the board
        6. next player's turn

        NOTE an invalid replacement choice in step 5 raises after the placement was committed. The turn is not passed on,
        so the next call asks the same player to place again.
        """
        if self._state.phase == Phase.NOT_STARTED:
            raise GameStateError("Game not started.")
        if self._state.phase == Phase.GAME_OVER:
            return False

        player = self._state.current_player()
        placement = player.request_placement(self.snapshot())
        located = self._validate_placement(player, placement)

        simulator = Simulator(self._state)
        pushed_off = simulator.place_piece_as_player(located, player)
        logger.debug(
            "Game %s: %s placed size %d at (%d, %d), pushed off %d",
            self.id,
            player.name,
            located.size,
            located.x,
            located.y,
            len(pushed_off),
        )
        self._emit(PiecePlaced(located))

        winner = self._state.winning_player()
        if winner is not None:
            self._emit(PlayerWon(winner))
            self._state.phase = Phase.GAME_OVER
            logger.info("Game %s: %s has won", self.id, winner.name)
            return False

        if not player.hand:
            self._force_self_replacement(player)

        self._resolve_replacements()

        self._state.advance_turn()
        return True

    def run(self) -> int:
        """Keep playing rounds until the game is over. Returns the number of rounds played."""
        if self._state.phase == Phase.NOT_STARTED:
            raise GameStateError("Game not started.")
        rounds = 0
        while self._state.phase == Phase.CHOOSING_PLACE:
            self.play_round()
            rounds += 1
            logger.debug("Game %s: round %d played", self.id, rounds)
        return rounds

    # -- PRIVATE HELPERS ---
    def _emit(self, event: GameEvent) -> None:
        """Every listener, in registration order. The triggering action is only done once they all returned."""
        for listener in self._listeners:
            listener(event)

    def _validate_placement(self, player: Player, placement: Placement) -> LocatedPiece:
        """Nothing is mutated before all checks pass."""
        position = Position(placement.x, placement.y)
        board = self._state.board
        if not board.is_on_board(position):
            raise PlacementError(
                f"Cannot place a piece outside of the board ({placement.x} / {placement.y})"
            )
        if not board.is_free(position):
            raise PlacementError(
                f"Cannot place a piece where another piece is ({placement.x} / {placement.y})"
            )

        stored_piece = player.held_piece(placement.piece_id)
        if stored_piece is None:
            raise InvalidPieceError(f"Piece {placement.piece_id!r} not in hand of {player.name!r}")
        if stored_piece.owner != player.id or (
            placement.owner is not None and placement.owner != stored_piece.owner
        ):
            raise InvalidPieceError(f"Piece {placement.piece_id!r} is not owned by {player.name!r}")
        if placement.size is not None and placement.size != stored_piece.size:
            raise InvalidPieceError(
                f"Invalid piece: {placement.piece_id!r} has size {stored_piece.size}, not {placement.size}"
            )
        return stored_piece.at(position)

    def _force_self_replacement(self, player: Player) -> None:
        """Out of pieces: the player takes one of their own pieces from the board back into their hand (not promoted)."""
        options = [
            Formation.of([located]) for located in self._state.board.pieces_of(player.id)
        ]
        logger.debug("Game %s: %s has an empty hand, forced replacement", self.id, player.name)
        self._perform_replacement(player, options)

    def _resolve_replacements(self) -> None:
        """
        Visit every player once, starting with the current one. Each resolves at most one of their triples.

        NOTE the triples are collected once. A replacement can not create new triples for later players to resolve in this round.
        """
        formations = self._state.board.formations()
        if not formations:
            return

        players = self._state.players
        start = self._state.current_player_index
        for offset in range(len(players)):
            visited = players[(start + offset) % len(players)]
            eligible = [formation for formation in formations if formation.owner == visited.id]
            if eligible:
                self._perform_replacement(visited, eligible)

    def _perform_replacement(self, player: Player, candidates: list[Formation]) -> None:
        if not candidates:
            raise GameStateError("Invalid game state: no replacement candidates to choose from.")

        if len(candidates) == 1:
            chosen = candidates[0]
        else:
            chosen_id = player.request_replacement_choice(candidates)
            chosen = next((c for c in candidates if c.id == chosen_id), None)
            if chosen is None:
                raise InvalidReplacementError(f"Invalid replacement: {chosen_id!r}")
        self._state.apply_replacement(chosen)
