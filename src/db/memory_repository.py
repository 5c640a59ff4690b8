"""Implementation of GameRegistry using a dictionary. Every game is its own unit of isolation"""

import logging
from typing import Optional
from uuid import UUID, uuid4

from src.boop.game import BoopGame

logger = logging.getLogger(__name__)


class InMemoryGameRegistry:
    def __init__(self) -> None:
        self._games: dict[UUID, BoopGame] = {}

    def create_game(
        self, width: Optional[int] = None, height: Optional[int] = None
    ) -> tuple[BoopGame, UUID]:
        """Create a new game and return it + its newly created game ID."""
        game_id = uuid4()
        game = BoopGame(str(game_id), width=width, height=height)
        self._games[game_id] = game
        logger.info("Created game %s", game_id)
        return game, game_id

    def get_game(self, game_id: UUID) -> BoopGame | None:
        """Get game by ID, if it exists."""
        return self._games.get(game_id)

    def list_games(self) -> list[UUID]:
        return list(self._games.keys())

    def delete_game(self, game_id: UUID) -> BoopGame | None:
        """Remove a game."""
        return self._games.pop(game_id, None)

    def clear(self) -> None:
        self._games.clear()
