"""
Move providers: where a player's decisions come from.

The Game asks a provider where to place which piece, and which replacement candidate to take.
Humans answer through a relay to some external collaborator (a socket, a CLI prompt, a test); bots answer themselves (see bots.py).
Both calls may block for as long as the answer takes.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from src.api.models import PlacementRequest, ReplacementChoiceRequest
from src.boop.pieces import Formation
from src.core.exceptions import InvalidRequestError
from src.core.models import GameModel


@dataclass(frozen=True)
class Placement:
    """Where to put which piece from your hand."""

    x: int
    y: int
    piece_id: str
    # optional claims about the piece, checked against the piece actually held
    size: Optional[int] = None
    owner: Optional[str] = None


class MoveProvider(Protocol):
    """Decision source of a single player."""

    def bind(self, player_id: str) -> None:
        """Called once, when the player this provider decides for joins a game."""
        ...

    def supply_placement(self, state: GameModel, player_id: str) -> Placement:
        """Pick a free cell and a piece from the player's hand."""
        ...

    def supply_replacement_choice(self, candidates: list[Formation]) -> str:
        """Return the id of one of the candidates."""
        ...


# What the external collaborator gets to see / has to send back
PlacementRelay = Callable[[GameModel], Any]
ReplacementRelay = Callable[[list[Formation]], Any]


class RelayMoveProvider:
    """
    Relays decisions to a human, through whatever transport owns the two callables.
    ---

    The relays receive the request payload and must (eventually) return the answer.
    Answers may be plain dicts (e.g. JSON from a socket) or the request models themselves; they are validated here.
    """

    def __init__(
        self,
        request_placement: PlacementRelay,
        request_replacement: ReplacementRelay,
    ) -> None:
        self._request_placement = request_placement
        self._request_replacement = request_replacement
        self.player_id: str | None = None

    def bind(self, player_id: str) -> None:
        self.player_id = player_id

    def supply_placement(self, state: GameModel, player_id: str) -> Placement:
        answer = self._request_placement(state)
        request = _parse(PlacementRequest, answer)
        return Placement(
            x=request.x,
            y=request.y,
            piece_id=request.piece_id,
            size=request.size,
            owner=request.owner,
        )

    def supply_replacement_choice(self, candidates: list[Formation]) -> str:
        answer = self._request_replacement(candidates)
        if isinstance(answer, str):
            return answer
        return _parse(ReplacementChoiceRequest, answer).replacement_id


def _parse(model: type[BaseModel], answer: Any) -> Any:
    if isinstance(answer, model):
        return answer
    try:
        return model.model_validate(answer)
    except PydanticValidationError as e:
        raise InvalidRequestError(f"Cannot interpret answer {answer!r}: {e}") from e
