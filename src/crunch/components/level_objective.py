from dataclasses import dataclass


@dataclass(slots=True)
class LevelObjective:
    """Goal parameters of the loaded level."""
    target_score: int
    maximum_moves: int
