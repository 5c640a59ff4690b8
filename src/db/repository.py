"""Protocol repositories: where live games are looked up, and where their move history gets recorded"""

from typing import Optional, Protocol
from uuid import UUID

from src.boop.game import BoopGame
from src.core.models import GameModel


class GameRegistry(Protocol):
    """Lookup of live game instances by game code. Games hold move providers, so they only live in memory."""

    def create_game(
        self, width: Optional[int] = None, height: Optional[int] = None
    ) -> tuple[BoopGame, UUID]:
        """Create a new game and return it + its newly created game ID."""
        ...

    def get_game(self, game_id: UUID) -> BoopGame | None:
        """Get game by ID, if it exists."""
        ...

    def list_games(self) -> list[UUID]:
        """IDs of all games."""
        ...

    def delete_game(self, game_id: UUID) -> BoopGame | None:
        """Remove a game."""
        ...


class HistoryRepository(Protocol):
    """Snapshots of a game after each event (for display / playback by some other collaborator)"""

    def record(self, game_id: UUID, event_type: str, snapshot: GameModel) -> int:
        """Store the snapshot, return its sequence number within the game."""
        ...

    def get_history(self, game_id: UUID) -> list[GameModel]:
        """All snapshots of a game, oldest first."""
        ...

    def latest(self, game_id: UUID) -> GameModel | None:
        """Most recent snapshot, if any."""
        ...

    def delete_history(self, game_id: UUID) -> int:
        """Remove all snapshots of a game. Returns how many were removed."""
        ...
