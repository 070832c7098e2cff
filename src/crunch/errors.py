"""Error taxonomy for the grid engine."""


class CrunchError(Exception):
    """Base class for every error raised by the engine."""


class GridContractError(CrunchError, ValueError):
    """A caller passed coordinates or a move the grid cannot accept.

    Raised before any state is touched.
    """


class LevelConfigError(CrunchError, ValueError):
    """Level input is inconsistent (mask size, type count, objective)."""


class ShuffleExhaustedError(CrunchError, RuntimeError):
    """No match-free layout with a legal move was found within the retry budget."""
