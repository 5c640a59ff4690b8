"""Test doubles and constants shared by several test modules"""

from typing import Callable

from src.boop.pieces import Formation
from src.boop.providers import Placement
from src.core.models import GameModel

PLAYER_A = "player-a"
PLAYER_B = "player-b"
PLAYER_C = "player-c"


class ScriptedProvider:
    """MoveProvider answering from a script. Records what it was asked."""

    def __init__(
        self,
        placements: list[Placement] | None = None,
        choose: Callable[[list[Formation]], str] | None = None,
    ) -> None:
        self.placements = list(placements or [])
        self.choose = choose or (lambda candidates: candidates[-1].id)
        self.player_id: str | None = None
        self.states_seen: list[GameModel] = []
        self.candidates_seen: list[list[Formation]] = []

    def bind(self, player_id: str) -> None:
        self.player_id = player_id

    def supply_placement(self, state: GameModel, player_id: str) -> Placement:
        self.states_seen.append(state)
        return self.placements.pop(0)

    def supply_replacement_choice(self, candidates: list[Formation]) -> str:
        self.candidates_seen.append(candidates)
        return self.choose(candidates)
