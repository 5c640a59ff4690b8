"""
Automated players.

A bot is a MoveProvider: it gets the same snapshot a human would get, reconstructs a detached GameState from it and
works out an answer, using the Simulator for lookahead where needed. Answers are paced with an artificial delay so a
human opponent can follow along; the delay never changes the decision.
"""

import logging
import random
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from src.boop.game_state import GameState, Player
from src.boop.pieces import Formation, Piece
from src.boop.position import Position
from src.boop.providers import Placement
from src.boop.simulator import Simulator
from src.core.config import get_settings
from src.core.exceptions import GameStateError, UnknownStrategyError
from src.core.models import GameModel
from src.core.shared_types import LARGE, SMALL, BotStrategy

logger = logging.getLogger(__name__)

BASE_RATING = 100
PUSH_OFF_WEIGHT = 10
FORMATION_WEIGHT = 100


class BotPlayer(ABC):
    """Common plumbing: binding to a player, pacing, per-instance RNG."""

    name = "Bot"

    def __init__(
        self,
        delay_seconds: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.delay_seconds = (
            delay_seconds if delay_seconds is not None else get_settings().bot_delay_seconds
        )
        self.rng = rng if rng is not None else random.Random()
        self.player_id: Optional[str] = None

    def bind(self, player_id: str) -> None:
        self.player_id = player_id

    def supply_placement(self, state: GameModel, player_id: str) -> Placement:
        self._pause()
        return self.choose_placement(GameState.from_model(state), player_id)

    def supply_replacement_choice(self, candidates: list[Formation]) -> str:
        self._pause()
        return self.choose_replacement(candidates)

    @abstractmethod
    def choose_placement(self, state: GameState, player_id: str) -> Placement:
        pass

    @abstractmethod
    def choose_replacement(self, candidates: list[Formation]) -> str:
        pass

    def _pause(self) -> None:
        if self.delay_seconds > 0:
            time.sleep(self.delay_seconds)

    def _acting_player(self, state: GameState, player_id: str) -> Player:
        player = state.player_by_id(player_id)
        if player is None:
            raise GameStateError(f"Bot asked to move for unknown player {player_id!r}.")
        return player


class TrivialBot(BotPlayer):
    """Random free cell, random piece. Always takes the first replacement offered."""

    name = "Trivial Bot"

    def choose_placement(self, state: GameState, player_id: str) -> Placement:
        player = self._acting_player(state, player_id)
        free_positions = state.board.free_positions()
        if not free_positions or not player.hand:
            raise GameStateError(f"{player.name!r} has no legal placement.")
        position = self.rng.choice(free_positions)
        piece = self.rng.choice(player.hand)
        return Placement(x=position.x, y=position.y, piece_id=piece.id)

    def choose_replacement(self, candidates: list[Formation]) -> str:
        return candidates[0].id


@dataclass
class Candidate:
    position: Position
    piece: Piece
    rating: int = BASE_RATING

    def to_placement(self) -> Placement:
        return Placement(x=self.position.x, y=self.position.y, piece_id=self.piece.id)


class HeuristicBot(BotPlayer):
    """
    One move lookahead.
    ---

    1. Can I win right now? --> do it.
    2. Try my first large and my first small piece on every free cell.
    3. Throw away moves after which an opponent has won, or the next player can win with their next placement.
    4. Rate the rest (central play, pushing opponents off, reachable formations) and take the best.
    5. Nothing left? --> any random move.
    """

    name = "Heuristic Bot"

    def choose_replacement(self, candidates: list[Formation]) -> str:
        """Smallest total size first: trade in as many small pieces as possible."""
        return best_formation(candidates).id

    def choose_placement(self, state: GameState, player_id: str) -> Placement:
        player = self._acting_player(state, player_id)

        winning_move = winning_placement(player_id, state)
        if winning_move is not None:
            logger.debug("%s found a winning placement %s", self.name, winning_move)
            return winning_move

        all_candidates = self._candidates(state, player)
        if not all_candidates:
            raise GameStateError(f"{player.name!r} has no legal placement.")

        options: list[Candidate] = []
        for candidate in all_candidates:
            rating = self._rate(state, player_id, candidate)
            if rating is None:
                continue
            candidate.rating = rating
            options.append(candidate)

        if not options:
            # no good options: just pick any
            logger.debug("%s has no safe option, picking a random one", self.name)
            return self.rng.choice(all_candidates).to_placement()

        # max() keeps the first of equally rated candidates
        return max(options, key=lambda option: option.rating).to_placement()

    def _candidates(self, state: GameState, player: Player) -> list[Candidate]:
        large = _first_of_size(player.hand, LARGE)
        small = _first_of_size(player.hand, SMALL)
        pieces = [piece for piece in (large, small) if piece is not None]
        return [
            Candidate(position, piece)
            for position in state.board.free_positions()
            for piece in pieces
        ]

    def _rate(self, state: GameState, player_id: str, candidate: Candidate) -> Optional[int]:
        """Rating of a candidate, or None if it hands the game to an opponent."""
        simulator = Simulator(state.clone())
        pushed_off = simulator.place_piece(candidate.piece.at(candidate.position))
        resulting = simulator.state.clone()
        simulator.rollback()
        # the placed piece left the hand
        acting = self._acting_player(resulting, player_id)
        acting.remove_from_hand(candidate.piece.id)

        winner = resulting.winning_player()
        if winner is not None and winner.id != player_id:
            return None

        next_player = resulting.next_player()
        rating = candidate.rating
        rating += distance_to_wall(candidate.position, resulting)
        for piece in pushed_off:
            weight = PUSH_OFF_WEIGHT * piece.size
            rating += -weight if piece.owner == player_id else weight
        rating += FORMATION_WEIGHT * formation_gain(resulting, player_id)
        rating -= FORMATION_WEIGHT * formation_gain(resulting, next_player.id)

        # assume everybody resolves replacements the way this bot would, until none are left
        formations = resulting.board.formations()
        while formations:
            chosen_id = self.choose_replacement(formations)
            resulting.apply_replacement(next(f for f in formations if f.id == chosen_id))
            formations = resulting.board.formations()

        if winning_placement(next_player.id, resulting) is not None:
            return None
        return rating


# --- HELPERS (shared by the heuristic and its lookahead) ---
def best_formation(formations: list[Formation]) -> Formation:
    """Formation with the smallest total size. First one wins a tie."""
    return min(formations, key=lambda formation: formation.total_size)


def formation_gain(state: GameState, player_id: str) -> int:
    """Total size of the pieces in the player's best formation currently on the board (0 if there is none)."""
    own = [f for f in state.board.formations() if f.owner == player_id]
    if not own:
        return 0
    return best_formation(own).total_size


def distance_to_wall(position: Position, state: GameState) -> int:
    """Further away from the edges is better."""
    board = state.board
    return min(position.x, position.y, board.width - position.x, board.height - position.y)


def winning_placement(player_id: str, state: GameState) -> Optional[Placement]:
    """First free cell where the player's first large piece would complete a winning line for that player."""
    player = state.player_by_id(player_id)
    if player is None:
        return None
    large = _first_of_size(player.hand, LARGE)
    if large is None:
        return None

    simulator = Simulator(state.clone())
    for position in simulator.state.board.free_positions():
        simulator.place_piece(large.at(position))
        winner = simulator.state.winning_player()
        simulator.rollback()
        if winner is not None and winner.id == player_id:
            return Placement(x=position.x, y=position.y, piece_id=large.id)
    return None


def _first_of_size(hand: list[Piece], size: int) -> Optional[Piece]:
    return next((piece for piece in hand if piece.size == size), None)


# --- FACTORY ---
BOTS: dict[BotStrategy, type[BotPlayer]] = {
    BotStrategy.TRIVIAL: TrivialBot,
    BotStrategy.HEURISTIC: HeuristicBot,
}


def create_bot(
    strategy: str,
    delay_seconds: Optional[float] = None,
    rng: Optional[random.Random] = None,
) -> BotPlayer:
    """Build a bot for the requested strategy. 'random' picks one of the concrete strategies."""
    try:
        requested = BotStrategy(strategy)
    except ValueError as e:
        raise UnknownStrategyError(
            f"Unknown bot type: {strategy!r}. Pick one from {','.join(s.value for s in BotStrategy)}"
        ) from e

    rng = rng if rng is not None else random.Random()
    if requested == BotStrategy.RANDOM:
        requested = rng.choice(list(BOTS))
    logger.debug("Creating %s bot", requested)
    return BOTS[requested](delay_seconds=delay_seconds, rng=rng)
