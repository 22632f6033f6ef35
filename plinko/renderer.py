import logging
import numpy as np
from typing import Dict, Optional, Tuple
from dataclasses import dataclass
import os

import plinko as P
from plinko.colors import saturate
from plinko.engine import Ball, PlinkoEngine
from plinko.layout import CanvasSize, fit_canvas

os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = '1'
import pygame

logger = logging.getLogger(__name__)


@dataclass
class AppearanceConfig:
    """Pixels only, never physics."""
    bg_color: Tuple[int, int, int] = P.BG_COLOR
    peg_color: Tuple[int, int, int] = P.PEG_COLOR
    corner_radius: int = P.SINK_CORNER_RADIUS
    shadow_offset: Tuple[int, int] = P.SINK_SHADOW_OFFSET
    shadow_saturation: float = P.SINK_SHADOW_SATURATION
    button_color: Tuple[int, int, int] = P.BUTTON_COLOR
    button_text_color: Tuple[int, int, int] = P.BUTTON_TEXT_COLOR
    margin: int = P.CANVAS_MARGIN
    pixel_ratio: float = 1.0
    fps: int = P.FPS


class Renderer:
    """Draws an engine's pegs, sinks and balls, and steps it once per frame."""

    def __init__(self, config: Optional[AppearanceConfig] = None):
        self.config = config or AppearanceConfig()
        if self.config.pixel_ratio <= 0:
            raise ValueError(f"pixel_ratio must be positive, got {self.config.pixel_ratio}")
        self._shadow_cache: Dict[Tuple[int, int, int], Tuple[int, int, int]] = {}

    def _px(self, v: float) -> int:
        return int(round(v * self.config.pixel_ratio))

    def _radius_px(self, r: float) -> int:
        return max(1, self._px(r))

    def shadow_color(self, color: Tuple[int, int, int]) -> Tuple[int, int, int]:
        if color not in self._shadow_cache:
            self._shadow_cache[color] = saturate(color, self.config.shadow_saturation)
        return self._shadow_cache[color]

    def new_surface(self, engine: PlinkoEngine) -> pygame.Surface:
        size = CanvasSize(engine.width, engine.height, self.config.pixel_ratio)
        return pygame.Surface(size.backing_size)

    # Drawing

    def draw_pegs(self, surface: pygame.Surface, engine: PlinkoEngine):
        for peg in engine.pegs:
            pygame.draw.circle(surface, self.config.peg_color,
                               (self._px(peg.x), self._px(peg.y)),
                               self._radius_px(peg.radius))

    def draw_sinks(self, surface: pygame.Surface, engine: PlinkoEngine):
        ox, oy = self.config.shadow_offset
        radius = self._px(self.config.corner_radius)
        for sink in engine.sinks:
            rect = pygame.Rect(self._px(sink.x), self._px(sink.y),
                               self._px(sink.width), self._px(sink.height))
            pygame.draw.rect(surface, self.shadow_color(sink.color),
                             rect.move(self._px(ox), self._px(oy)), border_radius=radius)
            pygame.draw.rect(surface, sink.color, rect, border_radius=radius)

    def draw_ball(self, surface: pygame.Surface, ball: Ball):
        pygame.draw.circle(surface, ball.color,
                           (self._px(ball.x), self._px(ball.y)),
                           self._radius_px(ball.radius))

    def draw_static(self, surface: pygame.Surface, engine: PlinkoEngine) -> pygame.Surface:
        """Redraw everything without advancing the simulation."""
        surface.fill(self.config.bg_color)
        self.draw_pegs(surface, engine)
        self.draw_sinks(surface, engine)
        for ball in engine.balls:
            self.draw_ball(surface, ball)
        return surface

    def draw_frame(self, surface: pygame.Surface, engine: PlinkoEngine) -> pygame.Surface:
        """
        One tick: clear, pegs, sinks, then each ball is drawn and only then
        updated, so the picture lags the physics by one step.
        """
        surface.fill(self.config.bg_color)
        self.draw_pegs(surface, engine)
        self.draw_sinks(surface, engine)
        engine.step(before_update=lambda ball: self.draw_ball(surface, ball))
        return surface

    def render(self, engine: PlinkoEngine, advance: bool = True) -> np.ndarray:
        """Render single frame → (H, W, 3) uint8. Steps the engine unless advance=False."""
        surface = self.new_surface(engine)
        if advance:
            self.draw_frame(surface, engine)
        else:
            self.draw_static(surface, engine)
        return pygame.surfarray.array3d(surface).transpose(1, 0, 2)

    # Interactive window

    def _button_rect(self, offset: int) -> pygame.Rect:
        return pygame.Rect(offset + 10, offset + 10, 110, 30)

    def play(self, engine: PlinkoEngine, max_frames: Optional[int] = None):
        """
        Board in a resizable pygame window. Click "Add ball" or press SPACE
        to drop a ball; Q or closing the window exits.
        """
        pygame.init()
        margin = self.config.margin
        offset = margin // 2
        window = (int(engine.width) + margin, int(engine.height) + margin)
        screen = pygame.display.set_mode(window, pygame.RESIZABLE)
        pygame.display.set_caption('Plinko')
        clock = pygame.time.Clock()
        font = pygame.font.Font(None, 24)
        button = self._button_rect(offset)
        label = font.render('Add ball', True, self.config.button_text_color)

        canvas = self.new_surface(engine)
        running = True
        frames = 0
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_q:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE:
                    engine.add_ball()
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    if button.collidepoint(event.pos):
                        engine.add_ball()
                elif event.type == pygame.VIDEORESIZE:
                    canvas = self._on_resize(engine, event.w, event.h)

            screen.fill(self.config.bg_color)
            self.draw_frame(canvas, engine)
            if self.config.pixel_ratio != 1.0:
                shown = pygame.transform.smoothscale(
                    canvas, (int(engine.width), int(engine.height)))
            else:
                shown = canvas
            screen.blit(shown, (offset, offset))
            pygame.draw.rect(screen, self.config.button_color, button, border_radius=6)
            screen.blit(label, label.get_rect(center=button.center))
            pygame.display.flip()

            frames += 1
            if max_frames is not None and frames >= max_frames:
                running = False
            clock.tick(self.config.fps)

        pygame.quit()

    def _on_resize(self, engine: PlinkoEngine, viewport_w: int, viewport_h: int) -> pygame.Surface:
        """Refit the canvas to the window. A window smaller than the margin keeps the old layout."""
        try:
            size = fit_canvas(viewport_w, viewport_h, self.config.pixel_ratio,
                              margin=self.config.margin)
        except ValueError as exc:
            logger.warning("Ignoring resize: %s", exc)
            return self.draw_static(self.new_surface(engine), engine)
        engine.resize(size.width, size.height)
        logger.info("Canvas resized to %.0fx%.0f", size.width, size.height)
        canvas = self.new_surface(engine)
        return self.draw_static(canvas, engine)
