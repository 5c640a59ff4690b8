"""Unit tests for src/db/memory_repository.py"""

from uuid import uuid4

from src.boop.game import BoopGame
from src.core.shared_types import Phase
from src.db.memory_repository import InMemoryGameRegistry


def test_create_game() -> None:
    registry = InMemoryGameRegistry()
    game, game_id = registry.create_game()

    assert isinstance(game, BoopGame)
    assert game.id == str(game_id)
    assert game.phase == Phase.NOT_STARTED
    assert (game.state.board.width, game.state.board.height) == (6, 6)


def test_create_game_with_dimensions() -> None:
    game, _ = InMemoryGameRegistry().create_game(width=8, height=4)
    assert (game.state.board.width, game.state.board.height) == (8, 4)


def test_every_game_gets_a_fresh_id() -> None:
    registry = InMemoryGameRegistry()
    ids = {registry.create_game()[1] for _ in range(5)}
    assert len(ids) == 5
    assert set(registry.list_games()) == ids


def test_get_game() -> None:
    registry = InMemoryGameRegistry()
    game, game_id = registry.create_game()
    registry.create_game()

    assert registry.get_game(game_id) is game
    assert registry.get_game(uuid4()) is None


def test_games_are_isolated() -> None:
    registry = InMemoryGameRegistry()
    first, _ = registry.create_game()
    second, _ = registry.create_game()
    assert first.state is not second.state
    assert first.state.board is not second.state.board


def test_delete_game() -> None:
    registry = InMemoryGameRegistry()
    game, game_id = registry.create_game()

    assert registry.delete_game(game_id) is game
    assert registry.get_game(game_id) is None
    assert registry.delete_game(game_id) is None
