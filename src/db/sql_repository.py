"""Implementation of HistoryRepository using SQLAlchemy"""

from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from src.core.models import GameModel
from src.db.schema import DBSnapshot


class SQLHistoryRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def record(self, game_id: UUID, event_type: str, snapshot: GameModel) -> int:
        """Store the snapshot, return its sequence number within the game."""
        sequence = self._next_sequence(game_id)
        snapshot_db = DBSnapshot(
            game_id=game_id,
            sequence=sequence,
            event_type=event_type,
            state=snapshot.to_dict(),
        )
        self.db.add(snapshot_db)
        self.db.commit()
        return sequence

    def get_history(self, game_id: UUID) -> list[GameModel]:
        """All snapshots of a game, oldest first."""
        query = (
            select(DBSnapshot)
            .where(DBSnapshot.game_id == game_id)
            .order_by(DBSnapshot.sequence)
        )
        return [self._to_model(snapshot_db) for snapshot_db in self.db.scalars(query)]

    def latest(self, game_id: UUID) -> GameModel | None:
        query = (
            select(DBSnapshot)
            .where(DBSnapshot.game_id == game_id)
            .order_by(DBSnapshot.sequence.desc())
            .limit(1)
        )
        snapshot_db = self.db.scalar(query)
        if snapshot_db:
            return self._to_model(snapshot_db)
        return None

    def delete_history(self, game_id: UUID) -> int:
        result = self.db.execute(delete(DBSnapshot).where(DBSnapshot.game_id == game_id))
        self.db.commit()
        return result.rowcount

    def event_types(self, game_id: UUID) -> list[str]:
        """Which event each snapshot belongs to, oldest first."""
        query = (
            select(DBSnapshot.event_type)
            .where(DBSnapshot.game_id == game_id)
            .order_by(DBSnapshot.sequence)
        )
        return list(self.db.scalars(query))

    def _next_sequence(self, game_id: UUID) -> int:
        query = select(func.max(DBSnapshot.sequence)).where(DBSnapshot.game_id == game_id)
        current = self.db.scalar(query)
        return 0 if current is None else current + 1

    def _to_model(self, snapshot_db: DBSnapshot) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel.from_dict(snapshot_db.state)
