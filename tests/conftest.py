"""
Pytest will auto-discover / import this file called 'conftest.py'. ]
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.boop.board import Gameboard
from src.boop.game_state import GameState, Player
from src.boop.pieces import LocatedPiece, Piece
from src.boop.position import Position
from src.core.shared_types import Phase
from src.db.schema import Base
from tests.helpers import PLAYER_A, PLAYER_B

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


@pytest.fixture
def make_state() -> Callable[..., GameState]:
    """Call the inner function to get a started state with empty hands and an empty board"""

    def _create_state(
        player_ids: tuple[str, ...] = (PLAYER_A, PLAYER_B),
        width: int = 6,
        height: int = 6,
    ) -> GameState:
        players = [Player(id=player_id, name=player_id) for player_id in player_ids]
        return GameState(
            phase=Phase.CHOOSING_PLACE,
            board=Gameboard(width, height),
            current_player_index=0,
            players=players,
        )

    return _create_state


@pytest.fixture
def put() -> Callable[..., LocatedPiece]:
    """Call the inner function to put a fresh piece straight onto the board (no pushes)"""

    def _put(state: GameState, owner: str, x: int, y: int, size: int = 1) -> LocatedPiece:
        located = Piece.new(owner, size).at(Position(x, y))
        state.board.set_piece(located)
        return located

    return _put
