"""Orchestration of communication from the transport layer to the game logic and the registry / history (and the reverse direction)."""

import logging
from typing import Callable, Optional
from uuid import UUID

from src.api.models import (
    AddBotRequest,
    AddPlayerRequest,
    BoardResponse,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LocatedPieceResponse,
    PieceResponse,
    PlayerJoinedResponse,
    PlayerResponse,
    PlayRoundRequest,
    PlayRoundResponse,
    StartGameRequest,
)
from src.boop.bots import create_bot
from src.boop.events import GameEvent
from src.boop.game import BoopGame
from src.boop.game_state import Player
from src.boop.pieces import new_id
from src.boop.providers import MoveProvider
from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.db.repository import GameRegistry, HistoryRepository

logger = logging.getLogger(__name__)

# A spectator gets the snapshot once (on attach) and then every event
SnapshotObserver = Callable[[GameModel], None]
EventObserver = Callable[[GameEvent], None]


class BoopService:
    """Orchestration of layers for the game."""

    def __init__(
        self,
        registry: GameRegistry,
        history: Optional[HistoryRepository] = None,
        bot_delay_seconds: Optional[float] = None,
    ) -> None:
        self.registry = registry
        self.history = history
        # None: use the configured pacing
        self.bot_delay_seconds = bot_delay_seconds

    # -- transport logic ---
    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """Create a new (empty) game. Players join next."""
        game, game_id = self.registry.create_game(width=request.width, height=request.height)
        if self.history is not None:
            self._attach_history(game, game_id, self.history)
        return self._create_game_response(game_id, game.snapshot())

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used by a transport to (re)draw the board for a player.
        """
        game = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game.snapshot())

    def add_player(
        self, request: AddPlayerRequest, provider: MoveProvider
    ) -> PlayerJoinedResponse:
        """A human joins. Their decisions get relayed through the given provider."""
        game = self._fetch_game(request.game_id)
        player = Player(
            id=request.player_id or new_id(), name=request.player_name, provider=provider
        )
        game.add_player(player)
        return self._create_joined_response(request.game_id, player)

    def add_bot(self, request: AddBotRequest) -> PlayerJoinedResponse:
        """An automated player joins."""
        game = self._fetch_game(request.game_id)
        bot = create_bot(request.strategy, delay_seconds=self.bot_delay_seconds)
        player = Player(id=new_id(), name=bot.name, provider=bot)
        game.add_player(player)
        return self._create_joined_response(request.game_id, player)

    def start_game(self, request: StartGameRequest) -> GameResponse:
        game = self._fetch_game(request.game_id)
        game.start()
        return self._create_game_response(request.game_id, game.snapshot())

    def play_round(self, request: PlayRoundRequest) -> PlayRoundResponse:
        """Play one round. Blocks for as long as the current player takes to answer."""
        game = self._fetch_game(request.game_id)
        game_continues = game.play_round()
        return PlayRoundResponse(
            game_id=request.game_id,
            game_continues=game_continues,
            game=self._create_game_response(request.game_id, game.snapshot()),
        )

    def run_game(self, request: PlayRoundRequest) -> GameResponse:
        """Play rounds until the game is over."""
        game = self._fetch_game(request.game_id)
        rounds = game.run()
        logger.info("Game %s finished after %d rounds", request.game_id, rounds)
        return self._create_game_response(request.game_id, game.snapshot())

    def add_spectator(
        self,
        game_id: UUID,
        on_snapshot: SnapshotObserver,
        on_event: EventObserver,
    ) -> None:
        """Passive observer: receives the current snapshot right away, then the event stream."""
        game = self._fetch_game(game_id)
        on_snapshot(game.snapshot())
        game.add_event_listener(on_event)

    def history_of(self, request: GetGameRequest) -> list[GameModel]:
        """Recorded snapshots (oldest first). Empty if no history is being kept."""
        self._fetch_game(request.game_id)
        if self.history is None:
            return []
        return self.history.get_history(request.game_id)

    def list_games(self) -> list[UUID]:
        return self.registry.list_games()

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a game (and its history)."""
        self.registry.delete_game(request.game_id)
        if self.history is not None:
            self.history.delete_history(request.game_id)

    # -- Internal helpers --
    def _attach_history(self, game: BoopGame, game_id: UUID, history: HistoryRepository) -> None:
        """Record the state after every event of this game."""

        def _record(event: GameEvent) -> None:
            history.record(game_id, event.type.value, game.snapshot())

        game.add_event_listener(_record)

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        return GameResponse(
            game_id=game_id,
            phase=model.phase,
            players=[
                PlayerResponse(
                    id=player.id,
                    name=player.name,
                    color=player.color,
                    hand=[
                        PieceResponse(id=piece.id, size=piece.size, owner=piece.owner)
                        for piece in player.hand
                    ],
                )
                for player in model.players
            ],
            board=BoardResponse(
                width=model.board.width,
                height=model.board.height,
                pieces=[
                    LocatedPieceResponse(
                        id=piece.id,
                        size=piece.size,
                        owner=piece.owner,
                        x=piece.x,
                        y=piece.y,
                    )
                    for piece in model.board.pieces
                ],
            ),
            current_player_index=model.current_player_index,
        )

    def _create_joined_response(self, game_id: UUID, player: Player) -> PlayerJoinedResponse:
        return PlayerJoinedResponse(
            game_id=game_id, player_id=player.id, name=player.name, color=player.color
        )

    def _fetch_game(self, game_id: UUID) -> BoopGame:
        """Attempt to find the game in the registry and raise error if it fails."""
        game = self.registry.get_game(game_id)
        if game is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game
