"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import LARGE, SMALL


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    width: Optional[int] = None
    height: Optional[int] = None

    @field_validator("width", "height")
    @classmethod
    def validate_dimension(cls, value: Optional[int]) -> Optional[int]:
        # a line of three has to fit on the board
        if value is not None and value < 3:
            raise InvalidRequestError(f"Board dimensions must be at least 3, got {value}.")
        return value


class AddPlayerRequest(BaseModel):
    game_id: UUID
    player_name: str
    player_id: Optional[str] = None


class AddBotRequest(BaseModel):
    game_id: UUID
    strategy: str = "heuristic"


class StartGameRequest(BaseModel):
    game_id: UUID


class PlayRoundRequest(BaseModel):
    game_id: UUID


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


class PlacementRequest(BaseModel):
    """Answer of a human player: where to put which piece."""

    x: int
    y: int
    piece_id: str
    size: Optional[int] = None
    owner: Optional[str] = None

    @field_validator("size")
    @classmethod
    def validate_size(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value not in (SMALL, LARGE):
            raise InvalidRequestError(f"Piece size must be {SMALL} or {LARGE}, got {value}.")
        return value


class ReplacementChoiceRequest(BaseModel):
    """Answer of a human player: id of the chosen replacement candidate."""

    replacement_id: str


# --- RESPONSE MODELS ---
class PieceResponse(BaseModel):
    id: str
    size: int
    owner: str


class LocatedPieceResponse(PieceResponse):
    x: int
    y: int


class PlayerResponse(BaseModel):
    id: str
    name: str
    color: Optional[str]
    hand: list[PieceResponse]


class BoardResponse(BaseModel):
    width: int
    height: int
    pieces: list[LocatedPieceResponse]


class GameResponse(BaseModel):
    game_id: UUID
    phase: str
    players: list[PlayerResponse]
    board: BoardResponse
    current_player_index: int


class PlayRoundResponse(BaseModel):
    game_id: UUID
    game_continues: bool
    game: GameResponse


class PlayerJoinedResponse(BaseModel):
    game_id: UUID
    player_id: str
    name: str
    color: Optional[str]
