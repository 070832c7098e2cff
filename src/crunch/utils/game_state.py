from __future__ import annotations

from esper import World

from crunch.components.game_state import GameMode, GameState
from crunch.components.level_objective import LevelObjective
from crunch.events.bus import EVENT_GAME_MODE_CHANGED, EventBus


def get_game_state(world: World) -> GameState:
    """Return the singleton GameState, creating it if absent."""
    for _, state in world.get_component(GameState):
        return state
    state = GameState()
    world.create_entity(state)
    return state


def get_level_objective(world: World) -> LevelObjective:
    for _, objective in world.get_component(LevelObjective):
        return objective
    raise RuntimeError("LevelObjective not found")


def set_game_mode(world: World, event_bus: EventBus, mode: GameMode) -> None:
    """Update the global game mode and emit a change event when it differs."""
    state = get_game_state(world)
    previous_mode = state.mode
    if previous_mode == mode:
        return
    state.mode = mode
    event_bus.emit(EVENT_GAME_MODE_CHANGED, previous_mode=previous_mode, new_mode=mode)
