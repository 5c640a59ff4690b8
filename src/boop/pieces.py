"""Defines the pieces (held in a hand, or located on the board) and replacement candidates"""

from dataclasses import dataclass
from typing import Self
from uuid import uuid4

from src.boop.position import Position
from src.core.models import LocatedPieceModel, PieceModel
from src.core.shared_types import LARGE, SMALL


def new_id() -> str:
    return str(uuid4())


@dataclass
class Piece:
    id: str
    size: int
    owner: str

    @classmethod
    def new(cls, owner: str, size: int = SMALL) -> Self:
        """A freshly identified piece (used when dealing hands)."""
        return cls(new_id(), size, owner)

    @classmethod
    def from_model(cls, model: PieceModel) -> Self:
        return cls(model.id, model.size, model.owner)

    def to_model(self) -> PieceModel:
        return PieceModel(id=self.id, size=self.size, owner=self.owner)

    def promote(self) -> None:
        """Size only ever grows once: 1 -> 2. A large piece stays large."""
        if self.size == SMALL:
            self.size = LARGE

    def at(self, position: Position) -> "LocatedPiece":
        return LocatedPiece(self, position)


@dataclass
class LocatedPiece:
    """A piece while it sits on the board. Identity, size and owner all belong to the wrapped piece."""

    piece: Piece
    position: Position

    @property
    def id(self) -> str:
        return self.piece.id

    @property
    def size(self) -> int:
        return self.piece.size

    @property
    def owner(self) -> str:
        return self.piece.owner

    @property
    def x(self) -> int:
        return self.position.x

    @property
    def y(self) -> int:
        return self.position.y

    @classmethod
    def from_model(cls, model: LocatedPieceModel) -> Self:
        return cls(Piece(model.id, model.size, model.owner), Position(model.x, model.y))

    def to_model(self) -> LocatedPieceModel:
        return LocatedPieceModel(
            id=self.id, size=self.size, owner=self.owner, x=self.x, y=self.y
        )

    def to_piece(self) -> Piece:
        """Take it off the board (unlocated copy, same identity)"""
        return Piece(self.id, self.size, self.owner)


@dataclass
class Formation:
    """
    Replacement candidate.

    Normally three same-owner pieces in a row. When a player runs out of pieces, each of their board pieces is offered as a
    single-piece candidate instead.
    """

    id: str
    pieces: list[LocatedPiece]

    @classmethod
    def of(cls, pieces: list[LocatedPiece]) -> Self:
        return cls(new_id(), pieces)

    @property
    def owner(self) -> str:
        return self.pieces[0].owner

    @property
    def total_size(self) -> int:
        return sum(piece.size for piece in self.pieces)

    @property
    def piece_ids(self) -> frozenset[str]:
        return frozenset(piece.id for piece in self.pieces)

    def is_triple(self) -> bool:
        return len(self.pieces) == 3

    def is_all_large(self) -> bool:
        return all(piece.size == LARGE for piece in self.pieces)
