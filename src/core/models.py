"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
The snapshot of a game (phase, players and their hands, board contents, turn pointer) is sent to spectators, stored in the
move history and can be turned back into a GameState to serve as a basis for simulation.
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Self

# Type aliases to make GameModel easier to read
PieceId = str
PlayerId = str


@dataclass
class PieceModel:
    id: PieceId
    size: int
    owner: PlayerId


@dataclass
class LocatedPieceModel:
    id: PieceId
    size: int
    owner: PlayerId
    x: int
    y: int


@dataclass
class BoardModel:
    width: int
    height: int
    pieces: list[LocatedPieceModel] = field(default_factory=list)


@dataclass
class PlayerModel:
    id: PlayerId
    name: str
    color: str | None
    hand: list[PieceModel] = field(default_factory=list)


@dataclass
class GameModel:
    """Transport-safe representation of a game used between API, Service, DB, and Game layers."""

    phase: str
    players: list[PlayerModel]
    board: BoardModel
    current_player_index: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        board = data["board"]
        return cls(
            phase=data["phase"],
            players=[
                PlayerModel(
                    id=player["id"],
                    name=player["name"],
                    color=player["color"],
                    hand=[PieceModel(**piece) for piece in player["hand"]],
                )
                for player in data["players"]
            ],
            board=BoardModel(
                width=board["width"],
                height=board["height"],
                pieces=[LocatedPieceModel(**piece) for piece in board["pieces"]],
            ),
            current_player_index=data["current_player_index"],
        )
