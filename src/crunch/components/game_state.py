"""Game state resource describing the active high-level mode."""
from dataclasses import dataclass
from enum import Enum, auto


class GameMode(Enum):
    """High-level phases of a level."""
    READY = auto()
    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass
class GameState:
    """Singleton component storing the mode and the player's progress."""
    mode: GameMode = GameMode.READY
    score: int = 0
    moves_left: int = 0
