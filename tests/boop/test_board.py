"""Unit tests for src/boop/board.py"""

from typing import Callable

import pytest

from src.boop.board import Gameboard
from src.boop.game_state import GameState
from src.boop.pieces import LocatedPiece, Piece
from src.boop.position import Position
from tests.helpers import PLAYER_A, PLAYER_B

StateFactory = Callable[..., GameState]
Put = Callable[..., LocatedPiece]


def test_empty_board() -> None:
    board = Gameboard(6, 6)
    assert len(board.free_positions()) == 36
    assert board.active_pieces() == []
    assert board.formations() == []


@pytest.mark.parametrize(
    "x, y, expected",
    [
        (0, 0, True),
        (5, 5, True),
        (5, 0, True),
        (-1, 0, False),
        (0, -1, False),
        (6, 0, False),
        (0, 6, False),
    ],
)
def test_is_on_board(x: int, y: int, expected: bool) -> None:
    assert Gameboard(6, 6).is_on_board(Position(x, y)) is expected


def test_non_square_board_bounds() -> None:
    board = Gameboard(4, 3)
    assert board.is_on_board(Position(3, 2))
    assert not board.is_on_board(Position(2, 3))
    assert len(board.free_positions()) == 12


def test_set_get_clear() -> None:
    board = Gameboard(6, 6)
    piece = Piece("id", 1, PLAYER_A)
    board.set_piece(piece.at(Position(2, 3)))

    assert board.piece_at(Position(2, 3)) == piece
    assert not board.is_free(Position(2, 3))
    assert board.active_pieces() == [LocatedPiece(piece, Position(2, 3))]

    board.clear_piece(Position(2, 3))
    assert board.piece_at(Position(2, 3)) is None
    assert board.is_free(Position(2, 3))


def test_off_board_cells_hold_nothing() -> None:
    board = Gameboard(6, 6)
    assert board.piece_at(Position(-1, 7)) is None
    # free, but not a place to put anything: placing checks is_on_board as well
    assert board.is_free(Position(-1, 7))
    assert not board.is_on_board(Position(-1, 7))


def test_free_plus_occupied_is_board_size(make_state: StateFactory, put: Put) -> None:
    state = make_state()
    for x, y in [(0, 0), (1, 3), (5, 5), (2, 2), (4, 0)]:
        put(state, PLAYER_A, x, y)
        board = state.board
        assert len(board.free_positions()) + len(board.active_pieces()) == 36


def test_pieces_are_listed_column_by_column(make_state: StateFactory, put: Put) -> None:
    state = make_state()
    put(state, PLAYER_A, 2, 0)
    put(state, PLAYER_A, 0, 4)
    put(state, PLAYER_B, 0, 1)

    positions = [(located.x, located.y) for located in state.board.active_pieces()]
    assert positions == [(0, 1), (0, 4), (2, 0)]


def test_pieces_of_owner(make_state: StateFactory, put: Put) -> None:
    state = make_state()
    own = put(state, PLAYER_A, 1, 1)
    put(state, PLAYER_B, 2, 2)
    assert state.board.pieces_of(PLAYER_A) == [own]


def test_reset_clears_the_board(make_state: StateFactory, put: Put) -> None:
    state = make_state()
    put(state, PLAYER_A, 1, 1)
    state.board.reset()
    assert state.board.active_pieces() == []


# -- FORMATIONS ---
def test_diagonal_triple_is_found_once(make_state: StateFactory, put: Put) -> None:
    """Three of A's small pieces on (0,0), (1,1), (2,2) and nothing else."""
    state = make_state()
    ids = {put(state, PLAYER_A, i, i).id for i in range(3)}

    formations = state.board.formations()
    assert len(formations) == 1
    assert formations[0].piece_ids == ids
    assert formations[0].owner == PLAYER_A


@pytest.mark.parametrize(
    "cells",
    [
        [(0, 0), (1, 0), (2, 0)],  # horizontal
        [(3, 1), (3, 2), (3, 3)],  # vertical
        [(5, 0), (4, 1), (3, 2)],  # anti-diagonal
        [(2, 5), (3, 4), (4, 3)],  # anti-diagonal, other way up
        [(3, 3), (4, 4), (5, 5)],  # diagonal into the corner
    ],
)
def test_each_direction_reported_once(
    make_state: StateFactory, put: Put, cells: list[tuple[int, int]]
) -> None:
    state = make_state()
    ids = {put(state, PLAYER_A, x, y).id for x, y in cells}
    formations = state.board.formations()
    assert [formation.piece_ids for formation in formations] == [ids]


def test_line_of_four_gives_two_triples(make_state: StateFactory, put: Put) -> None:
    state = make_state()
    line = [put(state, PLAYER_A, x, 2) for x in range(4)]

    found = {formation.piece_ids for formation in state.board.formations()}
    assert found == {
        frozenset(piece.id for piece in line[:3]),
        frozenset(piece.id for piece in line[1:]),
    }


def test_piece_can_be_part_of_several_triples(make_state: StateFactory, put: Put) -> None:
    """A plus sign: the center is in the horizontal and in the vertical triple."""
    state = make_state()
    center = put(state, PLAYER_A, 2, 2)
    for x, y in [(1, 2), (3, 2), (2, 1), (2, 3)]:
        put(state, PLAYER_A, x, y)

    formations = state.board.formations()
    assert len(formations) == 2
    assert all(center.id in formation.piece_ids for formation in formations)


def test_mixed_owners_do_not_form(make_state: StateFactory, put: Put) -> None:
    state = make_state()
    put(state, PLAYER_A, 0, 0)
    put(state, PLAYER_B, 1, 0)
    put(state, PLAYER_A, 2, 0)
    assert state.board.formations() == []


def test_gap_does_not_form(make_state: StateFactory, put: Put) -> None:
    state = make_state()
    put(state, PLAYER_A, 0, 0)
    put(state, PLAYER_A, 1, 0)
    put(state, PLAYER_A, 3, 0)
    assert state.board.formations() == []


def test_triples_of_different_players(make_state: StateFactory, put: Put) -> None:
    state = make_state()
    for x in range(3):
        put(state, PLAYER_A, x, 0)
        put(state, PLAYER_B, x, 5)

    owners = sorted(formation.owner for formation in state.board.formations())
    assert owners == [PLAYER_A, PLAYER_B]


def test_board_model_round_trip(make_state: StateFactory, put: Put) -> None:
    state = make_state()
    put(state, PLAYER_A, 0, 0)
    put(state, PLAYER_B, 4, 1, 2)

    model = state.board.to_model()
    rebuilt = Gameboard.from_model(model)
    assert rebuilt == state.board
    assert rebuilt.to_model() == model
