"""Runtime settings (board dimensions, hand size, bot pacing, database url)"""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Self

ENV_PREFIX = "BOOP_"


@dataclass(frozen=True)
class Settings:
    board_width: int = 6
    board_height: int = 6
    hand_size: int = 8
    # pacing delay before a bot answers. Only affects timing, never the decision itself
    bot_delay_seconds: float = 1.0
    # history of snapshots lives in memory by default: no persistence across restarts
    database_url: str = "sqlite:///:memory:"

    @classmethod
    def from_env(cls) -> Self:
        """Override the defaults with BOOP_* environment variables, if set."""
        defaults = cls()
        return cls(
            board_width=int(
                os.environ.get(f"{ENV_PREFIX}BOARD_WIDTH", defaults.board_width)
            ),
            board_height=int(
                os.environ.get(f"{ENV_PREFIX}BOARD_HEIGHT", defaults.board_height)
            ),
            hand_size=int(os.environ.get(f"{ENV_PREFIX}HAND_SIZE", defaults.hand_size)),
            bot_delay_seconds=float(
                os.environ.get(
                    f"{ENV_PREFIX}BOT_DELAY_SECONDS", defaults.bot_delay_seconds
                )
            ),
            database_url=os.environ.get(
                f"{ENV_PREFIX}DATABASE_URL", defaults.database_url
            ),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
