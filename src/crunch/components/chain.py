from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple

from crunch.components.cookie import Cookie


class ChainType(Enum):
    HORIZONTAL = auto()
    VERTICAL = auto()


@dataclass(frozen=True, slots=True)
class Chain:
    """One matched run, built by match detection and never modified.

    cookies are ordered along the run: by column for horizontal chains,
    by row for vertical ones.
    """
    chain_type: ChainType
    cookies: Tuple[Cookie, ...]
    score: int = 0

    def __len__(self) -> int:
        return len(self.cookies)

    @property
    def cookie_type(self) -> int:
        return self.cookies[0].cookie_type

    @property
    def positions(self) -> list[tuple[int, int]]:
        return [cookie.position for cookie in self.cookies]
