from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Position = Tuple[int, int]  # (column, row)


@dataclass(frozen=True, slots=True, eq=False)
class Move:
    """A proposed exchange of the cookies at positions a and b.

    Direction is kept for animation purposes but ignored by equality, so a
    swipe from a to b and one from b to a name the same move.
    """
    a: Position
    b: Position

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Move):
            return NotImplemented
        return {self.a, self.b} == {other.a, other.b}

    def __hash__(self) -> int:
        return hash(frozenset((self.a, self.b)))

    def is_adjacent(self) -> bool:
        (ac, ar), (bc, br) = self.a, self.b
        return (abs(ac - bc) == 1 and ar == br) or (abs(ar - br) == 1 and ac == bc)

    def reversed(self) -> "Move":
        return Move(self.b, self.a)
