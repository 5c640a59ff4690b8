"""The Gameboard stores which piece sits on which cell and answers the geometry questions (bounds, free cells, formations)"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.boop.pieces import Formation, LocatedPiece, Piece
from src.boop.position import DIRECTIONS, Position
from src.core.models import BoardModel


@dataclass
class Gameboard:
    width: int
    height: int
    # only occupied cells are stored
    cells: dict[Position, Piece] = field(default_factory=dict)

    @classmethod
    def from_model(cls, model: BoardModel) -> Self:
        board = cls(model.width, model.height)
        for located_model in model.pieces:
            board.set_piece(LocatedPiece.from_model(located_model))
        return board

    def to_model(self) -> BoardModel:
        return BoardModel(
            width=self.width,
            height=self.height,
            pieces=[located.to_model() for located in self.active_pieces()],
        )

    def is_on_board(self, position: Position) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def is_free(self, position: Position) -> bool:
        return self.piece_at(position) is None

    def piece_at(self, position: Position) -> Optional[Piece]:
        """Off-board cells simply hold nothing"""
        return self.cells.get(position)

    def set_piece(self, located: LocatedPiece) -> None:
        self.cells[located.position] = located.piece

    def clear_piece(self, position: Position) -> None:
        self.cells.pop(position, None)

    def reset(self) -> None:
        self.cells.clear()

    def all_positions(self) -> list[Position]:
        """Column by column: x first, then y."""
        return [Position(x, y) for x in range(self.width) for y in range(self.height)]

    def active_pieces(self) -> list[LocatedPiece]:
        return [
            LocatedPiece(self.cells[position], position)
            for position in self.all_positions()
            if position in self.cells
        ]

    def free_positions(self) -> list[Position]:
        return [position for position in self.all_positions() if self.is_free(position)]

    def pieces_of(self, owner: str) -> list[LocatedPiece]:
        return [located for located in self.active_pieces() if located.owner == owner]

    def formations(self) -> list[Formation]:
        """
        All triples of same-owner pieces on consecutive cells, in any of the 8 directions.
        ---

        Every piece is used as a starting point in every direction, so the same triple shows up twice (once from each end).
        A triple is only recorded the first time its set of piece ids is seen.
        NOTE a single piece can still be part of several different triples.
        """
        formations: list[Formation] = []
        seen: set[frozenset[str]] = set()
        for located in self.active_pieces():
            for dx, dy in DIRECTIONS:
                second = self._located_at(located.position.offset(dx, dy))
                third = self._located_at(located.position.offset(dx, dy, steps=2))
                if second is None or third is None:
                    continue
                if second.owner != located.owner or third.owner != located.owner:
                    continue

                piece_ids = frozenset((located.id, second.id, third.id))
                if piece_ids in seen:
                    continue
                seen.add(piece_ids)
                formations.append(Formation.of([located, second, third]))
        return formations

    def _located_at(self, position: Position) -> Optional[LocatedPiece]:
        piece = self.piece_at(position)
        return LocatedPiece(piece, position) if piece is not None else None
