from dataclasses import dataclass


@dataclass(slots=True)
class TurnState:
    """Tracks cascade progress for the turn being resolved."""

    cascade_active: bool = False
    cascade_depth: int = 0
    turns_taken: int = 0
