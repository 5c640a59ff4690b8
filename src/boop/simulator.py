"""
Places pieces (including the pushes that follow) on a GameState, with the option to undo.

Used for committed moves by the Game and for hypothetical moves by the bots. Every placement first stores a snapshot of the
state, so a lookahead can place, inspect and `rollback()`.
"""

from src.boop.game_state import GameState, Player
from src.boop.pieces import LocatedPiece, Piece
from src.boop.position import DIRECTIONS, Position
from src.core.exceptions import GameStateError, PlacementError, RollbackError


class Simulator:
    def __init__(self, state: GameState) -> None:
        self.state = state
        self._snapshots: list[GameState] = []

    @property
    def depth(self) -> int:
        """Number of placements that can still be rolled back."""
        return len(self._snapshots)

    def rollback(self) -> None:
        """Restore the state as it was before the most recent placement."""
        if not self._snapshots:
            raise RollbackError("Cannot rollback: no placement to undo.")
        self.state = self._snapshots.pop()

    def place_piece_as_player(self, located: LocatedPiece, player: Player) -> list[Piece]:
        """Take the piece out of the player's hand, then place it."""
        acting = self.state.player_by_id(player.id)
        if acting is None:
            raise GameStateError(f"Player {player.name!r} is not part of this game.")
        acting.remove_from_hand(located.id)
        return self.place_piece(located)

    def place_piece(self, located: LocatedPiece) -> list[Piece]:
        """
        Put the piece on the board and push its neighbours.
        ---

        Returns the pieces that got pushed off the board (they are back in their owner's hand).
        NOTE the snapshot is taken before anything else, so a failed placement can (and must) be rolled back like any other.
        """
        self._snapshots.append(self.state.copy_with_providers())

        board = self.state.board
        if not board.is_on_board(located.position):
            raise PlacementError(
                f"Cannot put a piece outside of the board: ({located.x}, {located.y})"
            )
        if not board.is_free(located.position):
            raise PlacementError(
                f"Cannot put a piece where another piece is: ({located.x}, {located.y})"
            )

        board.set_piece(located)
        pushed_off: list[Piece] = []
        for dx, dy in DIRECTIONS:
            piece = self._push(located.position.offset(dx, dy), located.size, dx, dy)
            if piece is not None:
                pushed_off.append(piece)
        return pushed_off

    def _push(self, position: Position, strength: int, dx: int, dy: int) -> Piece | None:
        """
        Push the neighbour at `position` one cell further in direction (dx, dy).

        * nothing there / larger than the placed piece / target cell taken: nothing happens
        * target cell off the board: the piece goes back to its owner's hand (returned)
        * otherwise: the piece slides one cell. Single hop, it does not push anything itself.
        """
        board = self.state.board
        piece = board.piece_at(position)
        if piece is None or piece.size > strength:
            return None

        target = position.offset(dx, dy)
        if not board.is_on_board(target):
            board.clear_piece(position)
            owner = self.state.player_by_id(piece.owner)
            if owner is None:
                raise GameStateError(f"Piece {piece.id} has an unknown owner {piece.owner!r}.")
            owner.hand.append(piece)
            return piece

        if not board.is_free(target):
            return None

        board.clear_piece(position)
        board.set_piece(LocatedPiece(piece, target))
        return None
