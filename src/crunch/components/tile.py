from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Tile:
    """A playable cell of the level."""
    column: int
    row: int
