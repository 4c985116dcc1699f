"""Game state machine composing physics, obstacles, collision and scoring.

The GameStateMachine owns a single immutable GameState and replaces it on
every transition. Hosts drive it with ``tick(dt)`` at a fixed cadence and
forward input triggers through ``jump()`` and ``reset()``; render layers read
``get_state()`` or subscribe to snapshots. All public operations take the
same lock, so a jump arriving from an input thread lands either fully before
or fully after a tick.
"""

import logging
import threading
from dataclasses import replace
from typing import Callable, List, Optional

from .config import FlappyConfig
from .constraints import ParameterConstraints
from .entities import Agent, GameState, Phase
from .obstacles import ObstacleField
from .physics import integrate, apply_jump
from .rng import RandomSource, NumpyRandomSource, RandomGapSource
from . import collision, scoring

logger = logging.getLogger(__name__)

Listener = Callable[[GameState], None]


class GameStateMachine:
    """Lifecycle (idle -> running -> over -> reset) around the deterministic core.

    Args:
        config: Game configuration. Uses defaults if None.
        random_source: Source of floats in [0, 1) for gap placement. A fresh
            unseeded NumpyRandomSource is used if None.

    Raises:
        ConfigurationError: If the field geometry cannot hold a gap.
    """

    def __init__(self, config: Optional[FlappyConfig] = None,
                 random_source: Optional[RandomSource] = None):
        self.config = config or FlappyConfig()

        result = ParameterConstraints.require_valid(self.config)
        for warning in result.warnings:
            logger.warning("Config warning (%s): %s", warning.param, warning.message)

        self.random_source = random_source if random_source is not None else NumpyRandomSource()
        self.obstacle_field = ObstacleField(self.config, RandomGapSource(self.random_source))

        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self._state = self._initial_state()

    def _initial_state(self) -> GameState:
        agent = Agent(self.config.agent_start_x, self.config.agent_start_y, 0.0)
        return GameState(phase=Phase.IDLE, agent=agent)

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def get_state(self) -> GameState:
        """Latest snapshot. Safe to hold; it is never mutated."""
        with self._lock:
            return self._state

    @property
    def state(self) -> GameState:
        return self.get_state()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback receiving every new snapshot.

        Returns:
            A function that removes the listener.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, state: GameState) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(state)

    # ------------------------------------------------------------------
    # Input triggers
    # ------------------------------------------------------------------

    def jump(self) -> None:
        """Start the run when idle, otherwise overwrite velocity with the impulse.

        The first jump of a run only starts it and has no physics effect.
        Ignored once the game is over.
        """
        with self._lock:
            state = self._state
            if state.phase is Phase.IDLE:
                self._state = replace(state, phase=Phase.RUNNING)
                logger.info("Run started")
            elif state.phase is Phase.RUNNING:
                self._state = replace(
                    state,
                    agent=apply_jump(state.agent, self.config),
                    just_jumped=True,
                )
            else:
                return
            new_state = self._state
        self._notify(new_state)

    def reset(self) -> None:
        """Discard the run and return to a fresh idle state."""
        with self._lock:
            previous = self._state
            self.obstacle_field.reset()
            self._state = new_state = self._initial_state()
        if previous.phase is not Phase.IDLE or previous.tick_count:
            logger.info("Reset after %d ticks (score %d)", previous.tick_count, previous.score)
        self._notify(new_state)

    # ------------------------------------------------------------------
    # Simulation step
    # ------------------------------------------------------------------

    def tick(self, dt: float = 1.0) -> GameState:
        """Advance the simulation by dt ticks.

        No-op unless running. Order within a tick: agent physics (ground
        contact ends the run and freezes everything), obstacle scroll/spawn,
        then per obstacle in field order scoring before collision.

        Returns:
            The snapshot after the tick.
        """
        with self._lock:
            state = self._state
            if state.phase is not Phase.RUNNING or dt <= 0:
                return state
            self._state = new_state = self._step(state, dt)
        self._notify(new_state)
        return new_state

    def _step(self, state: GameState, dt: float) -> GameState:
        tick_count = state.tick_count + 1
        agent, hit_ground = integrate(state.agent, dt, self.config)

        if hit_ground:
            logger.info("Game over: ground contact at tick %d, score %d", tick_count, state.score)
            return replace(
                state,
                phase=Phase.OVER,
                tick_count=tick_count,
                just_jumped=False,
                death_cause="ground",
            )

        obstacles = self.obstacle_field.advance(state.obstacles, dt)

        score = state.score
        hit = None
        updated = []
        for obstacle in obstacles:
            obstacle, delta = scoring.evaluate(agent, obstacle, self.config)
            if delta:
                score += delta
                logger.debug("Passed obstacle %d, score %d", obstacle.id, score)
            if hit is None and collision.check_collision(agent, obstacle, self.config):
                hit = obstacle
            updated.append(obstacle)

        phase = Phase.RUNNING
        death_cause = None
        if hit is not None:
            phase = Phase.OVER
            death_cause = "obstacle"
            logger.info("Game over: hit obstacle %d at tick %d, score %d", hit.id, tick_count, score)

        return GameState(
            phase=phase,
            agent=agent,
            obstacles=tuple(updated),
            score=score,
            tick_count=tick_count,
            just_jumped=False,
            death_cause=death_cause,
        )
