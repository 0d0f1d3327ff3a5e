"""
Contains shared enums and constants used across tables and services.
"""
from enum import Enum
from typing import Optional

BEST_OF_CHOICES: tuple[int, ...] = (3, 5, 7)
BREAK_THRESHOLD = 10


class Player(str, Enum):
    player_a = "player_a"
    player_b = "player_b"

    @property
    def opponent(self) -> "Player":
        return Player.player_b if self is Player.player_a else Player.player_a


def coerce_player(value: object) -> Optional[Player]:
    """Return the Player for a raw stored value, or None when it names nobody.

    Rows read back from storage may carry the enum, its string value, or an
    empty string for "not set".
    """
    if isinstance(value, Player):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        return Player(value)
    except ValueError:
        return None
