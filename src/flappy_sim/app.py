"""Interactive pygame host: fixed-step driver plus input binding.

The host owns the window, the clock and the keyboard; the simulation only
sees ``tick``, ``jump`` and ``reset``.

Controls: Space / Up / W / left click = jump, R = reset, Esc = quit.
"""

import argparse
import logging
from dataclasses import replace
from typing import Optional, List

import pygame

from .config import FlappyConfig, CONFIGS
from .engine import GameStateMachine
from .obstacles import next_obstacle
from .entities import GameState
from .policies import POLICIES, BasePolicy
from .render import GameRenderer
from .rng import NumpyRandomSource

JUMP_KEYS = (pygame.K_SPACE, pygame.K_UP, pygame.K_w)


class FlappyApp:
    """Main loop coordinating the simulation, input and rendering.

    Args:
        config: Game configuration. Uses defaults if None.
        seed: Seed for gap placement.
        policy: Optional scripted policy that plays instead of the keyboard.
    """

    def __init__(self, config: Optional[FlappyConfig] = None, seed: Optional[int] = None,
                 policy: Optional[BasePolicy] = None):
        self.config = config or FlappyConfig()
        self.game = GameStateMachine(self.config, random_source=NumpyRandomSource(seed))
        self.policy = policy
        self.running = False
        self.best_score = 0

        pygame.init()
        self.renderer = GameRenderer(self.config)
        self.screen = pygame.display.set_mode((self.renderer.width, self.renderer.height))
        pygame.display.set_caption("Flappy Sim")
        self.clock = pygame.time.Clock()

        self._snapshot: GameState = self.game.get_state()
        self.game.subscribe(self._on_state)

    def _on_state(self, state: GameState) -> None:
        self.renderer.on_state(state)
        if state.is_over and not self._snapshot.is_over:
            self.best_score = max(self.best_score, state.score)
            print(f"GAME OVER: score={state.score} best={self.best_score} "
                  f"ticks={state.tick_count} cause={state.death_cause}")
        self._snapshot = state

    def handle_events(self) -> None:
        """Translate pygame events into simulation triggers."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_r:
                    self.game.reset()
                elif event.key in JUMP_KEYS and self.policy is None:
                    self.game.jump()
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and self.policy is None:
                self.game.jump()

    def handle_policy(self) -> None:
        """Let the scripted policy act on the latest snapshot."""
        if self.policy is None:
            return
        state = self._snapshot
        if state.is_idle:
            self.policy.reset()
            self.game.jump()
            return
        if state.is_running and self.policy.act(self._policy_obs(state)):
            self.game.jump()

    def _policy_obs(self, state: GameState) -> List[float]:
        cfg = self.config
        nxt = next_obstacle(state.obstacles, state.agent.left, cfg)
        if nxt is not None:
            dx = nxt.right(cfg.obstacle_width) - state.agent.left
            gap_top = nxt.gap_top_height
            gap_bottom = cfg.playable_height - nxt.gap_bottom_height
        else:
            dx, gap_top, gap_bottom = cfg.field_width - state.agent.left, 0.0, cfg.playable_height
        return [state.agent.position_y, state.agent.velocity_y, dx, gap_top, gap_bottom]

    def render(self) -> None:
        self.renderer.draw(self.screen, self._snapshot)
        font = pygame.font.Font(None, 24)
        best = font.render(f"Best: {self.best_score}", True, (255, 255, 255))
        self.screen.blit(best, (10, 10))
        pygame.display.flip()

    def run(self) -> None:
        """Main game loop: one tick of dt = 1 per frame at config.fps."""
        self.running = True
        while self.running:
            self.handle_events()
            self.handle_policy()
            self.game.tick(1.0)
            self.render()
            self.clock.tick(self.config.fps)
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play the side-scroller.")
    parser.add_argument("--config", choices=sorted(CONFIGS), default="default",
                        help="Preset configuration")
    parser.add_argument("--seed", type=int, default=None, help="Seed for gap placement")
    parser.add_argument("--policy", choices=sorted(POLICIES), default=None,
                        help="Let a scripted policy play")
    parser.add_argument("--integrator", choices=["explicit", "semi_implicit"], default=None,
                        help="Override the preset's integrator")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    config = CONFIGS[args.config]
    if args.integrator:
        config = replace(config, integrator=args.integrator)

    policy = None
    if args.policy == "gap_seeker":
        policy = POLICIES[args.policy](agent_size=config.agent_size)
    elif args.policy:
        policy = POLICIES[args.policy]()

    print(f"CONFIG: {args.config} gap={config.gap_size:.0f}px speed={config.obstacle_speed:.1f} "
          f"gravity={config.gravity:.2f} integrator={config.integrator}")
    FlappyApp(config, seed=args.seed, policy=policy).run()


if __name__ == "__main__":
    main()
