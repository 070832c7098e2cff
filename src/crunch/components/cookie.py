from dataclasses import dataclass

from crunch.constants import COOKIE_NAMES


@dataclass(frozen=True, slots=True)
class Cookie:
    """Snapshot of one cookie on the grid.

    cookie_type runs from 1 to the level's type count. Instances are values:
    the level hands out fresh copies and never reads them back.
    """
    column: int
    row: int
    cookie_type: int

    @property
    def position(self) -> tuple[int, int]:
        return self.column, self.row

    @property
    def name(self) -> str:
        if 1 <= self.cookie_type <= len(COOKIE_NAMES):
            return COOKIE_NAMES[self.cookie_type - 1]
        return f"cookie{self.cookie_type}"

    @property
    def sprite_name(self) -> str:
        return self.name

    @property
    def highlighted_sprite_name(self) -> str:
        return f"{self.name}-Highlighted"
