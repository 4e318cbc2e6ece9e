"""Session state resource: mode, lifecycle phase, target and score."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class GameMode(Enum):
    """How new rows enter the board."""
    TURN_BASED = auto()  # one new row after every successful clear
    TIMED = auto()       # one new row whenever the countdown expires


class SessionPhase(Enum):
    READY = auto()
    PLAYING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


@dataclass
class GameState:
    """Singleton component storing the active session's state."""
    mode: Optional[GameMode] = None
    phase: SessionPhase = SessionPhase.READY
    target: int = 0
    score: int = 0
    # In-memory only; survives restarts within one process.
    best_score: int = 0
