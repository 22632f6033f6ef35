"""
Plinko physics: balls fall, bounce off pegs, come to rest in sinks.

- Per-frame Euler step: gravity → velocity → position → pegs → sinks
- Peg response is arcade-style: the velocity is re-aimed along the contact
  normal and each axis is damped by its own friction factor
- Balls never touch each other
- State per ball: (x, y, vx, vy, radius)
"""

import logging
import math
import numpy as np
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Dict

import plinko as P
from plinko.layout import Layout, Peg, Sink, build_layout

logger = logging.getLogger(__name__)


@dataclass
class Ball:
    x: float
    y: float
    radius: float = P.BALL_RADIUS
    color: Tuple[int, int, int] = P.BALL_COLOR
    vx: float = 0.0
    vy: float = 0.0
    resting: bool = False
    sink_index: Optional[int] = None

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vy)

    @property
    def state(self) -> np.ndarray:
        return np.array([self.x, self.y, self.vx, self.vy])

    def update(self, layout: Layout, config: 'WorldConfig'):
        """Advance one frame. Resting balls are left alone."""
        if self.resting:
            return

        self.vy += config.gravity
        self.x += self.vx
        self.y += self.vy

        for peg in layout.pegs:
            self._collide_peg(peg, config)

        for i, sink in enumerate(layout.sinks):
            if self._inside_sink(sink):
                self.vx = 0.0
                self.vy = 0.0
                if not self.resting:
                    logger.debug("Ball at x=%.1f captured by sink %d", self.x, i)
                self.resting = True
                self.sink_index = i

    def _collide_peg(self, peg: Peg, config: 'WorldConfig'):
        dx = self.x - peg.x
        dy = self.y - peg.y
        dist = math.hypot(dx, dy)
        min_dist = self.radius + peg.radius

        if dist >= min_dist:
            return

        # Concentric centres: contact normal is undefined, push along +x
        angle = math.atan2(dy, dx) if dist > 0 else 0.0
        speed = self.speed
        self.vx = math.cos(angle) * speed * config.horizontal_friction
        self.vy = math.sin(angle) * speed * config.vertical_friction

        overlap = min_dist - dist
        self.x += math.cos(angle) * overlap
        self.y += math.sin(angle) * overlap

    def _inside_sink(self, sink: Sink) -> bool:
        # Same square the renderer draws: (x, y) is its top-left corner
        return (sink.left < self.x < sink.right
                and self.y + self.radius > sink.top)


@dataclass
class WorldConfig:
    gravity: float = P.GRAVITY
    horizontal_friction: float = P.HORIZONTAL_FRICTION
    vertical_friction: float = P.VERTICAL_FRICTION
    ball_radius: float = P.BALL_RADIUS
    ball_color: Tuple[int, int, int] = P.BALL_COLOR
    spawn_y: float = P.BALL_SPAWN_Y
    spawn_jitter: float = P.BALL_SPAWN_JITTER
    seed: Optional[int] = None


class PlinkoEngine:
    """
    Owns the whole simulation: canvas size, layout and balls.

    Step: for each ball, optional before_update hook (the renderer draws
    here) then Ball.update. Pegs and sinks only change on resize.
    """

    def __init__(self, width: float, height: float,
                 config: Optional[WorldConfig] = None):
        self.config = config or WorldConfig()
        self.rng = np.random.RandomState(self.config.seed)
        self.balls: List[Ball] = []
        self.frame: int = 0
        self.layout: Layout = build_layout(width, height)

    @property
    def width(self) -> float:
        return self.layout.width

    @property
    def height(self) -> float:
        return self.layout.height

    @property
    def pegs(self) -> List[Peg]:
        return self.layout.pegs

    @property
    def sinks(self) -> List[Sink]:
        return self.layout.sinks

    def resize(self, width: float, height: float) -> Layout:
        """Replace pegs and sinks for the new canvas. Balls are kept as-is."""
        self.layout = build_layout(width, height)
        return self.layout

    def add_ball(self, x: Optional[float] = None) -> Ball:
        """Drop a ball near top-centre, jittered horizontally unless x is given."""
        if x is None:
            centre = self.width / 2
            jitter = self.config.spawn_jitter
            x = float(self.rng.uniform(centre - jitter, centre + jitter))
        ball = Ball(x=x, y=self.config.spawn_y,
                    radius=self.config.ball_radius, color=self.config.ball_color)
        self.balls.append(ball)
        logger.debug("Added ball #%d at x=%.1f", len(self.balls), x)
        return ball

    def step(self, before_update: Optional[Callable[[Ball], None]] = None) -> List[Ball]:
        for ball in self.balls:
            if before_update is not None:
                before_update(ball)
            ball.update(self.layout, self.config)
        self.frame += 1
        return self.balls

    # State access

    def get_state(self) -> np.ndarray:
        """(n_balls, 4) → [x, y, vx, vy]"""
        return np.array([b.state for b in self.balls]).reshape(-1, 4)

    def is_out_of_bounds(self, ball: Ball) -> bool:
        return ball.y - ball.radius > self.height

    def all_settled(self) -> bool:
        return all(b.resting or self.is_out_of_bounds(b) for b in self.balls)

    def run_until_settled(self, max_steps: int = P.MAX_STEPS) -> int:
        """Step until every ball rests or has left the canvas. Returns steps taken."""
        steps = 0
        while steps < max_steps and not self.all_settled():
            self.step()
            steps += 1
        if not self.all_settled():
            moving = sum(1 for b in self.balls
                         if not b.resting and not self.is_out_of_bounds(b))
            logger.warning("Stopped after %d steps with %d balls still moving",
                           steps, moving)
        return steps


def drop_balls(n_balls: int = P.N_BALLS,
               width: float = P.DEFAULT_CANVAS_SIZE,
               height: float = P.DEFAULT_CANVAS_SIZE,
               max_steps: int = P.MAX_STEPS,
               seed: int = P.SEED,
               **kwargs) -> Dict:
    """
    Drop n_balls one after another (each settles before the next spawns).
    Returns dict with sink_indices, final_states, steps.
    """
    if n_balls < 0:
        raise ValueError(f"n_balls must be non-negative, got {n_balls}")

    engine = PlinkoEngine(width, height, WorldConfig(seed=seed, **kwargs))
    steps = []
    for i in range(n_balls):
        engine.add_ball()
        steps.append(engine.run_until_settled(max_steps))
        if (i + 1) % 50 == 0:
            logger.info("Dropped %d/%d balls", i + 1, n_balls)

    return {
        'sink_indices': [b.sink_index for b in engine.balls],
        'final_states': engine.get_state(),
        'steps': np.array(steps),
        'n_sinks': len(engine.sinks),
        'engine': engine,
    }
