"""Events emitted by a Game. Listeners (transport, spectators, history) receive them in emission order."""

from dataclasses import dataclass, field
from typing import Callable

from src.boop.game_state import Player
from src.boop.pieces import LocatedPiece
from src.core.shared_types import EventType


@dataclass(frozen=True)
class GameEvent:
    type: EventType = field(init=False)


@dataclass(frozen=True)
class PlayerAdded(GameEvent):
    player: Player
    type: EventType = field(default=EventType.PLAYER_ADDED, init=False)

    def __str__(self) -> str:
        return f"Player {self.player.name} has been added"


@dataclass(frozen=True)
class GameStarted(GameEvent):
    type: EventType = field(default=EventType.GAME_STARTED, init=False)

    def __str__(self) -> str:
        return "The game has started"


@dataclass(frozen=True)
class PiecePlaced(GameEvent):
    located_piece: LocatedPiece
    type: EventType = field(default=EventType.PIECE_PLACED, init=False)

    def __str__(self) -> str:
        piece = self.located_piece
        return f"Player placed a piece (size = {piece.size}) at ({piece.x}, {piece.y}) by {piece.owner}"


@dataclass(frozen=True)
class PlayerWon(GameEvent):
    player: Player
    type: EventType = field(default=EventType.PLAYER_WON, init=False)

    def __str__(self) -> str:
        return f"Player {self.player.name} has won"


EventListener = Callable[[GameEvent], None]
