"""
Type definitions used across layers
"""

from enum import StrEnum


class Phase(StrEnum):
    NOT_STARTED = "not-started"
    CHOOSING_PLACE = "choosing-place"
    GAME_OVER = "game-over"


class BotStrategy(StrEnum):
    TRIVIAL = "trivial"
    HEURISTIC = "heuristic"
    # picks one of the above when the bot is created
    RANDOM = "random"


class EventType(StrEnum):
    PLAYER_ADDED = "player-added"
    GAME_STARTED = "game-start"
    PIECE_PLACED = "player-placed-piece"
    PLAYER_WON = "player-won"


# Colors get handed out in join order. The palette size is also the maximum number of players.
PLAYER_COLORS: tuple[str, ...] = ("#FF0000", "#00FF00", "#0000FF")
MIN_PLAYERS = 2

SMALL = 1
LARGE = 2
