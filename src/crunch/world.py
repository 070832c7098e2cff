from esper import World

from crunch.components.game_state import GameMode, GameState
from crunch.components.level_objective import LevelObjective
from crunch.components.turn_state import TurnState
from crunch.level import Level


def create_world(level: Level) -> World:
    """Build the world holding the game resources for one level.

    The grid itself stays inside the Level; the world only carries the
    objective, the player's progress and the turn bookkeeping.
    """
    world = World()
    setattr(world, "random", level.rng)

    state_entity = world.create_entity()
    world.add_component(state_entity, GameState(mode=GameMode.READY, moves_left=level.maximum_moves))
    world.add_component(
        state_entity,
        LevelObjective(target_score=level.target_score, maximum_moves=level.maximum_moves),
    )
    world.create_entity(TurnState())
    return world
